##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from workit.backends.storage_selector import storage_selector


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(autouse=True)
def reset_storage_selector():
    """
    Forget the process-wide storage backend after every test so that no test
    inherits a backend selected by another one.
    """
    yield
    storage_selector.reset()
