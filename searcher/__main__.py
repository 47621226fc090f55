import sys

from searcher.main import main

sys.exit(main())
