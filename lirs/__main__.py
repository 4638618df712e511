import sys

from lirs.repl import main

sys.exit(main())
