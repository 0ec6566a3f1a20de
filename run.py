#!/usr/bin/env python3
"""
10K Types of Oatmeal Launcher
==============================
Run this script to start the game: python run.py [width] [height]
"""

from oatmeal.main import main

if __name__ == "__main__":
    main()
