#!/usr/bin/env python3
"""
Unified Intelligence — Scaling Report
=====================================
Thin entry-point. All logic lives in scaling_lab.evaluator.

Usage:
    python3 generate_report.py results/<stamp>/unified_intelligence_scaling_<stamp>.json
    python3 generate_report.py RESULTS.json --charts results/<stamp>/graphs
"""

from scaling_lab.evaluator.cli import main

if __name__ == "__main__":
    main()
