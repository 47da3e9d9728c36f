#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render spreadsheet rows onto 7x18 adhesive label sheets.
"""

# local repo modules
import sheet_label_engine.cli


if __name__ == "__main__":
	sheet_label_engine.cli.main()
