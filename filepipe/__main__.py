import sys

from filepipe.cli import main


sys.exit(main())
