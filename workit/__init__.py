##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Workit: a freelance marketplace backend.

This module contains the source code for Workit's storage layer, the marketplace
rules that sit on top of it, and the operator CLI.
"""

__version__ = "0.4.0"
VERSION = __version__
