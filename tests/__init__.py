"""
cmake-new test suite
====================

Test Modules
------------
- test_models.py: Pydantic configuration models
- test_languages.py: language, standard and project type tokens
- test_config.py: config file loading and option layering
- test_renderer.py: document contents
- test_generator.py: directory creation, file writing, pipeline
- test_vcs.py: git initialization
- test_cli.py: command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Skip tests that need a real git executable
    pytest -m "not integration"

    # Run a specific test class
    pytest tests/test_config.py::TestResolveOptions
"""
