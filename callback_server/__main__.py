import sys

from callback_server.server import main

sys.exit(main())
