import sys

from largesql.cli import main

sys.exit(main())
