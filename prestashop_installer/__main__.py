import sys

from prestashop_installer.cli import main

if __name__ == "__main__":
    sys.exit(main())
