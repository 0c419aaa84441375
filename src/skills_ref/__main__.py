import sys

from skills_ref.cli import main

sys.exit(main())
