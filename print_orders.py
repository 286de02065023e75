#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Print order messages and address labels from an order export CSV.
"""

import hey_sweetie_printer.cli


if __name__ == "__main__":
	hey_sweetie_printer.cli.main()
