#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Entry Point for the executable."""

import sys

import kurve

if __name__ == "__main__":
    sys.exit(kurve.main())
