"""
Project configuration discovery and import map transform construction
"""

import json
import os

import pytest

from denoresolve.common.defaults import ConfigOverride
from denoresolve.resolution.errors import ImportMapParseError, ProjectConfigError
from denoresolve.resolution.import_map import ImportMapStore
from denoresolve.resolution.project_config import (
    build_import_map_transform,
    find_project_config,
    identity,
    load_project_config,
)


@pytest.mark.unit
def test_find_project_config_searches_upward(make_project):
    project = make_project()
    nested = os.path.join(project, "src", "deep")
    os.makedirs(nested)
    assert find_project_config(nested) == os.path.join(project, "tsconfig.json")


@pytest.mark.unit
def test_find_project_config_from_file_path(make_project):
    project = make_project()
    source = os.path.join(project, "main.ts")
    with open(source, "w", encoding="utf-8") as f:
        f.write("")
    assert find_project_config(source) == os.path.join(project, "tsconfig.json")


@pytest.mark.unit
def test_find_project_config_custom_filenames(tmp_path):
    (tmp_path / "deno.json").write_text("{}", encoding="utf-8")
    with ConfigOverride({"PROJECT_CONFIG_FILENAMES": ["deno.json", "tsconfig.json"]}):
        assert find_project_config(str(tmp_path)) == str(tmp_path / "deno.json")


@pytest.mark.unit
def test_load_project_config_tolerates_comments_and_trailing_commas(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_text(
        '\ufeff{\n  // deno settings\n  "denoOptions": { "importMap": "maps/import_map.json", },\n'
        '  /* block */ "compilerOptions": {"baseUrl": "https://example.com/x"},\n}\n',
        encoding="utf-8",
    )
    config = load_project_config(str(path))
    assert config.deno_options == {"importMap": "maps/import_map.json"}
    assert config.data["compilerOptions"]["baseUrl"] == "https://example.com/x"
    assert config.import_map_path == str(tmp_path / "maps" / "import_map.json")


@pytest.mark.unit
def test_empty_project_config_has_no_import_map(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_text("", encoding="utf-8")
    assert load_project_config(str(path)).import_map_path is None


@pytest.mark.unit
def test_malformed_project_config_raises(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_text("{ nope", encoding="utf-8")
    with pytest.raises(ProjectConfigError):
        load_project_config(str(path))


@pytest.mark.unit
def test_non_utf8_project_config_raises(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_bytes(b'{"denoOptions": {"importMap": "\xff.json"}}')
    with pytest.raises(ProjectConfigError):
        load_project_config(str(path))


@pytest.mark.unit
def test_transform_substitutes_prefix(make_project):
    project = make_project(imports={"std/": "https://deno.land/std/"})
    transform = build_import_map_transform(project, ImportMapStore())
    assert transform("std/http/mod.ts") == "https://deno.land/std/http/mod.ts"
    assert transform("./local.ts") == "./local.ts"


@pytest.mark.unit
def test_transform_identity_without_import_map(make_project):
    project = make_project()
    assert build_import_map_transform(project, ImportMapStore()) is identity


@pytest.mark.unit
def test_transform_identity_when_import_map_missing(make_project, logger):
    project = make_project(tsconfig={"denoOptions": {"importMap": "missing.json"}})
    assert build_import_map_transform(project, ImportMapStore(), logger) is identity


@pytest.mark.unit
def test_transform_propagates_malformed_import_map(make_project):
    project = make_project(imports={"std/": "https://deno.land/std/"})
    with open(os.path.join(project, "import_map.json"), "w", encoding="utf-8") as f:
        f.write(json.dumps({"no_imports": True}))
    with pytest.raises(ImportMapParseError):
        build_import_map_transform(project, ImportMapStore())


@pytest.mark.unit
def test_import_map_path_is_relative_to_config_directory(make_project):
    project = make_project(imports={"x/": "https://x.land/"}, import_map_name="import_map.json")
    nested = os.path.join(project, "src")
    os.makedirs(nested)
    transform = build_import_map_transform(nested, ImportMapStore())
    assert transform("x/mod") == "https://x.land/mod"
