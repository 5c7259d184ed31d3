import sys

from file_tree_mcp.server.main import main

sys.exit(main())
