import sys
from heyvr.publish import main

sys.exit(main())
