"""
Prompt 渲染测试
"""

import pytest
from pathlib import Path

from skills_ref import (
    ParseError,
    SkillLocation,
    SkillProperties,
    html_escape,
    render,
    to_prompt,
)


def create_skill(root: Path, name: str, description: str) -> Path:
    skill_dir = root / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(
        f"---\nname: {name}\ndescription: {description}\n---\n# {name}\n",
        encoding="utf-8",
    )
    return skill_dir


class TestHtmlEscape:
    """测试转义"""

    def test_all_special_characters(self):
        assert html_escape("<script>&\"'") == "&lt;script&gt;&amp;&quot;&#x27;"

    def test_ampersand_not_double_escaped(self):
        assert html_escape("&lt;") == "&amp;lt;"
        assert html_escape("a & b") == "a &amp; b"

    def test_plain_text_unchanged(self):
        assert html_escape("pdf-reader") == "pdf-reader"


class TestRender:
    """测试 render"""

    def test_empty(self):
        assert render([]) == "<available_skills>\n</available_skills>"

    def test_single_skill_layout(self):
        location = SkillLocation(
            properties=SkillProperties(name="my-skill", description="A test skill"),
            location=Path("/skills/my-skill/SKILL.md"),
        )

        assert render([location]).split("\n") == [
            "<available_skills>",
            "<skill>",
            "<name>",
            "my-skill",
            "</name>",
            "<description>",
            "A test skill",
            "</description>",
            "<location>",
            str(Path("/skills/my-skill/SKILL.md")),
            "</location>",
            "</skill>",
            "</available_skills>",
        ]

    def test_escapes_text(self):
        location = SkillLocation(
            properties=SkillProperties(name="my-skill", description="<script>&\"'"),
            location=Path("/skills/my-skill/SKILL.md"),
        )

        output = render([location])
        assert "&lt;script&gt;&amp;&quot;&#x27;" in output
        assert "&amp;amp;" not in output
        assert "<script>" not in output

    def test_keeps_input_order(self):
        locations = [
            SkillLocation(
                properties=SkillProperties(name=name, description=f"{name} skill"),
                location=Path(f"/skills/{name}/SKILL.md"),
            )
            for name in ["zeta", "alpha"]
        ]

        output = render(locations)
        assert output.count("<skill>") == 2
        assert output.index("zeta") < output.index("alpha")

    def test_no_trailing_newline(self):
        location = SkillLocation(
            properties=SkillProperties(name="a", description="b"),
            location=Path("/a/SKILL.md"),
        )
        assert render([location]).endswith("</skill>\n</available_skills>")


class TestToPrompt:
    """测试 to_prompt"""

    def test_empty(self):
        assert to_prompt([]) == "<available_skills>\n</available_skills>"

    def test_single_skill(self, tmp_path: Path):
        skill_dir = create_skill(tmp_path, "my-skill", "A test skill")

        lines = to_prompt([skill_dir]).split("\n")
        assert lines[:5] == ["<available_skills>", "<skill>", "<name>", "my-skill", "</name>"]
        assert lines[6] == "A test skill"
        assert lines[9] == str((skill_dir / "SKILL.md").resolve())

    def test_multiple_skills(self, tmp_path: Path):
        skill1 = create_skill(tmp_path, "skill-one", "First skill")
        skill2 = create_skill(tmp_path, "skill-two", "Second skill")

        output = to_prompt([skill1, skill2])
        assert output.count("<skill>") == 2
        assert output.index("skill-one") < output.index("skill-two")
        assert "First skill" in output
        assert "Second skill" in output

    def test_html_escaping_from_file(self, tmp_path: Path):
        skill_dir = create_skill(
            tmp_path, "test-skill", 'A skill with <special> & "characters"'
        )

        output = to_prompt([skill_dir])
        assert "&lt;special&gt;" in output
        assert "&amp;" in output
        assert "&quot;characters&quot;" in output

    def test_location_is_resolved(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """location 为解析后的绝对路径（相对路径、符号链接均展开）"""
        skill_dir = create_skill(tmp_path / "real", "my-skill", "A test skill")
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "real", target_is_directory=True)
        monkeypatch.chdir(tmp_path)

        output = to_prompt([Path("link") / "my-skill"])
        assert str((skill_dir / "SKILL.md").resolve()) in output
        assert str(Path("link") / "my-skill") not in output.split("<location>")[1]

    def test_lowercase_skill_md_location(self, tmp_path: Path):
        skill_dir = tmp_path / "my-skill"
        skill_dir.mkdir()
        (skill_dir / "skill.md").write_text("---\nname: my-skill\ndescription: x\n---\n")

        assert "skill.md" in to_prompt([skill_dir]).lower()

    def test_missing_skill_md(self, tmp_path: Path):
        skill_dir = tmp_path / "empty"
        skill_dir.mkdir()

        with pytest.raises(ParseError):
            to_prompt([skill_dir])
