##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
The `db_scripts` package contains the record definitions of Workit and the
high-level interfaces built on top of the storage backends.

Modules:
    data_models: Dataclasses defining the six record types and their validation rules.
    marketplace: Ownership, pricing and redaction rules applied on top of a backend.
    workit_db: The operator-facing `WorkitDatabase` used by the `database` CLI command.
"""
