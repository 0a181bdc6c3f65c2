"""
hyper-types Test Suite
======================

Unit tests for the hyper-types payload types and codec.

Test Categories:
    - test_basic.py: Import tests and package metadata
    - test_codec.py: Field metadata, encode/decode, timestamps, text helpers
    - test_config.py: Environment configuration
    - test_containers.py, test_networks.py, test_volumes.py,
      test_system.py (incl. images), test_security.py: Payload types
    - test_endpoints.py: Endpoint registry
    - test_roundtrip.py: Decode then encode for every payload type
    - test_cli.py: Command line interface

Running Tests:
    pytest tests/ -v
    pytest tests/ -v --cov=hyper_types
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
