import sys

from indent_tree.main_cmd import main

sys.exit(main())
