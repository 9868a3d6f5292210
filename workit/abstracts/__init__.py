##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
Workit's codebase.

Modules:
    factory: Contains `WorkitBaseFactory`, used to manage pluggable components in Workit.
"""

from workit.abstracts.factory import WorkitBaseFactory


__all__ = ["WorkitBaseFactory"]
