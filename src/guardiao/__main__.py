"""
Run with: python -m guardiao
"""
import sys

from guardiao.main import main

if __name__ == "__main__":
    sys.exit(main())
