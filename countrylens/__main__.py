import sys

from countrylens.main import main

sys.exit(main())
