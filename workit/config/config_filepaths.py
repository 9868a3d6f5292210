##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
Workit's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
WORKIT_HOME: str = os.environ.get("WORKIT_HOME", os.path.join(USER_HOME, ".workit"))
