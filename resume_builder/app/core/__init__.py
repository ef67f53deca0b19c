"""This module serves as the initialization file for the core package of the resume builder application.

Notes:
    1. This file is intentionally empty as it is used to initialize the package.
    2. The core functionality is organized in submodules within the core directory.

"""
