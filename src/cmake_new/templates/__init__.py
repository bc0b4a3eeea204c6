"""
cmake_new.templates - Jinja2 Template Files
===========================================

Jinja2 templates for the text documents cmake-new generates. The JSON
documents (``CMakePresets.json`` and ``.vscode/tasks.json``) are built as
dictionaries in ``cmake_new.renderer`` instead.

Available Templates
-------------------
Starter sources (one per language and project type):
    - main_c_exe.c.j2
    - main_c_lib.c.j2
    - main_cxx_exe.cpp.j2
    - main_cxx_lib.cpp.j2

Project files:
    - CMakeLists.txt.j2
    - README.md.j2
    - gitignore.j2: rendered to ``.gitignore`` when git is requested

Template Context
----------------
    config : ResolvedConfig
        The resolved configuration.

    cmake_new_version : str
        Version of cmake-new for attribution.
"""

# Templates are loaded by Jinja2's PackageLoader; nothing to import here.
