"""Run with: python -m hanoivisualizer"""
import sys

from hanoivisualizer.main import main

if __name__ == "__main__":
    sys.exit(main())
