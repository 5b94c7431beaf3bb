import sys

from cella.interpreter import main

sys.exit(main())
