import sys

from ballquad.examples._cli import main

sys.exit(main())
