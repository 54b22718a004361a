#!/usr/bin/env python3
"""
Unified Intelligence — Adaptive Scaling Sweep
==============================================
Thin entry-point. All logic lives in scaling_lab.runner.cli.

Usage:
    python3 run_sweep.py        # fixed catalogue 32 → 2048 entities
"""

from scaling_lab.runner.cli import main

if __name__ == "__main__":
    main()
