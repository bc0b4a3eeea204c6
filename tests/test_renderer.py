"""
Tests for cmake_new.renderer
============================

Test Organization
-----------------
- TestTemplateEnvironment: Jinja2 setup
- TestStarterSource: the four starter templates
- TestCMakeLists: build description
- TestPresets: CMakePresets.json
- TestVscodeTasks: .vscode/tasks.json
- TestRenderAll: the document set per configuration
"""

import json
from pathlib import Path

import pytest

from cmake_new import __version__
from cmake_new.models import CxxStandard, Language, ProjectType, ResolvedConfig
from cmake_new.renderer import (
    SOURCE_TEMPLATES,
    build_presets,
    build_vscode_tasks,
    create_jinja_env,
    render_all,
    render_source,
    render_template,
)


def make_config(**kwargs) -> ResolvedConfig:
    kwargs.setdefault("name", "demo")
    return ResolvedConfig(**kwargs)


# =============================================================================
# Template Environment Tests
# =============================================================================

class TestTemplateEnvironment:
    """Tests for the Jinja2 environment."""

    def test_create_jinja_env(self) -> None:
        env = create_jinja_env()
        assert env.trim_blocks is True
        assert env.lstrip_blocks is True
        assert env.keep_trailing_newline is True

    def test_every_language_type_pair_has_template(self) -> None:
        for language in Language:
            for project_type in ProjectType:
                assert (language, project_type) in SOURCE_TEMPLATES

    def test_all_templates_exist(self) -> None:
        env = create_jinja_env()
        for template_name in SOURCE_TEMPLATES.values():
            env.get_template(template_name)


# =============================================================================
# Starter Source Tests
# =============================================================================

class TestStarterSource:
    """Tests for the starter source templates."""

    def test_c_exe(self) -> None:
        content = render_source(
            create_jinja_env(),
            make_config(name="tool", language=Language.C, project_type=ProjectType.EXE),
        )
        assert "#include <stdio.h>" in content
        assert "int main(void)" in content
        assert 'printf("Hello from tool\\n");' in content

    def test_c_lib(self) -> None:
        content = render_source(
            create_jinja_env(),
            make_config(name="tool", language=Language.C, project_type=ProjectType.LIB),
        )
        assert "void tool_hello(void)" in content
        assert "Hello from tool (lib)" in content
        assert "main(" not in content

    def test_cxx_exe(self) -> None:
        content = render_source(
            create_jinja_env(),
            make_config(language=Language.CXX, project_type=ProjectType.EXE),
        )
        assert "#include <iostream>" in content
        assert "int main()" in content
        assert 'std::cout << "Hello from demo" << std::endl;' in content

    def test_cxx_lib(self) -> None:
        content = render_source(
            create_jinja_env(),
            make_config(language=Language.CXX, project_type=ProjectType.LIB),
        )
        assert "void demo_hello()" in content
        assert "Hello from demo (lib)" in content

    def test_hyphenated_name_gives_valid_identifier(self) -> None:
        content = render_source(
            create_jinja_env(),
            make_config(name="my-lib", language=Language.C, project_type=ProjectType.LIB),
        )
        assert "void my_lib_hello(void)" in content
        assert "Hello from my-lib (lib)" in content

    def test_ends_with_newline(self) -> None:
        content = render_source(create_jinja_env(), make_config())
        assert content.endswith("}\n")


# =============================================================================
# CMakeLists Tests
# =============================================================================

class TestCMakeLists:
    """Tests for CMakeLists.txt.j2."""

    def render(self, config: ResolvedConfig) -> str:
        return render_template(create_jinja_env(), "CMakeLists.txt.j2", config)

    def test_header(self) -> None:
        content = self.render(make_config(language=Language.C))
        assert content.startswith("cmake_minimum_required(VERSION 3.15)\n")
        assert "project(demo LANGUAGES C)" in content

    def test_glob_sources(self) -> None:
        content = self.render(make_config(language=Language.CXX))
        assert "file(GLOB_RECURSE SOURCES CONFIGURE_DEPENDS" in content
        assert "/src/*.cpp" in content

    def test_executable_target(self) -> None:
        content = self.render(make_config(project_type=ProjectType.EXE))
        assert "add_executable(demo ${SOURCES})" in content
        assert "add_library" not in content

    def test_library_target(self) -> None:
        content = self.render(make_config(project_type=ProjectType.LIB))
        assert "add_library(demo ${SOURCES})" in content
        assert "add_executable" not in content

    @pytest.mark.parametrize("standard", list(CxxStandard))
    def test_standard_line(self, standard: CxxStandard) -> None:
        content = self.render(make_config(language=Language.CXX, standard=standard))
        assert f"set_property(TARGET demo PROPERTY CXX_STANDARD {standard.value})" in content

    def test_no_standard_line_without_standard(self) -> None:
        content = self.render(make_config(language=Language.CXX, standard=None))
        assert "CXX_STANDARD" not in content

    def test_no_standard_line_for_c(self) -> None:
        content = self.render(make_config(language=Language.C))
        assert "CXX_STANDARD" not in content
        assert "/src/*.c\"" in content

    def test_external_subdirectory(self) -> None:
        content = self.render(make_config())
        assert "add_subdirectory(external)" in content
        assert 'if(EXISTS "${CMAKE_CURRENT_SOURCE_DIR}/external/CMakeLists.txt")' in content


# =============================================================================
# Presets Tests
# =============================================================================

class TestPresets:
    """Tests for build_presets."""

    def test_structure(self) -> None:
        presets = build_presets(make_config())

        assert presets["version"] == 3
        assert presets["cmakeMinimumRequired"] == {"major": 3, "minor": 15, "patch": 0}
        assert [p["name"] for p in presets["configurePresets"]] == ["debug", "release"]
        assert presets["buildPresets"] == [
            {"name": "debug", "configurePreset": "debug"},
            {"name": "release", "configurePreset": "release"},
        ]

    def test_generator_and_build_type(self) -> None:
        presets = build_presets(make_config(generator="Unix Makefiles"))
        debug, release = presets["configurePresets"]

        assert debug["generator"] == release["generator"] == "Unix Makefiles"
        assert debug["cacheVariables"] == {"CMAKE_BUILD_TYPE": "Debug"}
        assert release["cacheVariables"] == {"CMAKE_BUILD_TYPE": "Release"}
        assert debug["binaryDir"] == "${sourceDir}/build/debug"
        assert release["binaryDir"] == "${sourceDir}/build/release"
        assert debug["displayName"] == "Debug"
        assert release["description"] == "Use Release configuration"


# =============================================================================
# VS Code Tasks Tests
# =============================================================================

class TestVscodeTasks:
    """Tests for build_vscode_tasks."""

    def test_six_tasks(self) -> None:
        tasks = build_vscode_tasks(make_config(name="tool"))

        assert tasks["version"] == "2.0.0"
        assert [t["label"] for t in tasks["tasks"]] == [
            "Configure (Debug)",
            "Build (Debug)",
            "Run (Debug)",
            "Configure (Release)",
            "Build (Release)",
            "Run (Release)",
        ]

    def test_dependency_chain(self) -> None:
        tasks = {t["label"]: t for t in build_vscode_tasks(make_config())["tasks"]}

        assert "dependsOn" not in tasks["Configure (Debug)"]
        assert tasks["Build (Debug)"]["dependsOn"] == ["Configure (Debug)"]
        assert tasks["Run (Release)"]["dependsOn"] == ["Build (Release)"]
        assert all(
            t["dependsOrder"] == "sequence" for t in tasks.values() if "dependsOn" in t
        )

    def test_commands(self) -> None:
        tasks = {t["label"]: t for t in build_vscode_tasks(make_config(name="tool"))["tasks"]}

        assert tasks["Configure (Debug)"]["command"] == "cmake --preset debug"
        assert tasks["Build (Release)"]["command"] == "cmake --build --preset release"
        assert tasks["Run (Debug)"]["command"] == "./build/debug/tool"
        assert tasks["Configure (Release)"]["hide"] is True
        assert all(t["type"] == "shell" for t in tasks.values())

    def test_library_run_tasks_do_not_start_a_binary(self) -> None:
        config = make_config(name="tool", project_type=ProjectType.LIB)
        tasks = {t["label"]: t for t in build_vscode_tasks(config)["tasks"]}

        for label in ("Run (Debug)", "Run (Release)"):
            assert "./build/" not in tasks[label]["command"]
            assert tasks[label]["command"].startswith("echo ")
            assert "tool is a library" in tasks[label]["command"]
        assert tasks["Run (Release)"]["dependsOn"] == ["Build (Release)"]


# =============================================================================
# render_all Tests
# =============================================================================

class TestRenderAll:
    """Tests for the full document set."""

    def test_minimal_set(self) -> None:
        files = render_all(make_config())
        assert set(files) == {
            Path("src/main.cpp"),
            Path("CMakeLists.txt"),
            Path("CMakePresets.json"),
            Path("README.md"),
        }

    def test_vscode_adds_tasks(self) -> None:
        files = render_all(make_config(vscode_tasks=True))
        assert Path(".vscode/tasks.json") in files
        assert len(json.loads(files[Path(".vscode/tasks.json")])["tasks"]) == 6

    def test_git_adds_gitignore(self) -> None:
        files = render_all(make_config(init_git=True))
        assert "build/" in files[Path(".gitignore")]

    def test_no_gitignore_without_git(self) -> None:
        assert Path(".gitignore") not in render_all(make_config(init_git=False))

    def test_source_comes_first(self) -> None:
        files = render_all(make_config(language=Language.C))
        assert next(iter(files)) == Path("src/main.c")

    def test_presets_are_valid_json(self) -> None:
        files = render_all(make_config())
        presets = json.loads(files[Path("CMakePresets.json")])
        assert presets["configurePresets"][0]["generator"] == "Ninja"

    def test_readme(self) -> None:
        readme = render_all(make_config(name="tool", language=Language.C))[Path("README.md")]

        assert readme.startswith("# tool\n")
        assert "cmake --preset debug" in readme
        assert "./build/debug/tool" in readme
        assert __version__ in readme

    def test_readme_for_library_has_no_run_step(self) -> None:
        readme = render_all(make_config(project_type=ProjectType.LIB))[Path("README.md")]
        assert "./build/debug/demo" not in readme

    def test_readme_mentions_tasks_only_when_enabled(self) -> None:
        assert "tasks.json" not in render_all(make_config())[Path("README.md")]
        assert "tasks.json" in render_all(make_config(vscode_tasks=True))[Path("README.md")]
