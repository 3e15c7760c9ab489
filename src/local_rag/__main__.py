import sys

from local_rag.cli import main

sys.exit(main())
