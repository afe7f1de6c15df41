"""
Pytest configuration and shared fixtures
"""

import json
import os

import pytest

from denoresolve.common.utils import Logger


@pytest.fixture
def logger():
    """Provide a verbose logger for tests"""
    return Logger(verbose=True)


@pytest.fixture
def tree_parser():
    """
    Return a callable that parses code for a given language and returns the root node

    Usage:
        root = tree_parser('typescript', "import x from './x.ts'\n")
    """
    tsl = pytest.importorskip("denoresolve.common.tsl")

    def _parse(language, code):
        return tsl.parse_source(code, language)

    return _parse


@pytest.fixture
def deno_dir(tmp_path):
    """Empty Deno directory with a deps/ folder"""
    root = tmp_path / "deno"
    (root / "deps").mkdir(parents=True)
    return str(root)


@pytest.fixture
def cache_module(deno_dir):
    """
    Write a module (and optionally its headers) into the dependency cache

    Usage:
        path = cache_module('https://deno.land/x/mod.ts', body='export {}')
        cache_module('https://deno.land/x/old.ts', headers={'redirect_to': 'https://deno.land/x/mod.ts'})

    Returns the extensionless cache path of the module
    """

    def _cache(url, body=None, headers=None):
        rel = url.replace("://", "/", 1)
        if rel.endswith(".ts"):
            rel = rel[:-3]
        base = os.path.join(deno_dir, "deps", rel)
        os.makedirs(os.path.dirname(base), exist_ok=True)
        if body is not None:
            with open(f"{base}.ts", "w", encoding="utf-8") as f:
                f.write(body)
        if headers is not None:
            with open(f"{base}.ts.headers.json", "w", encoding="utf-8") as f:
                json.dump(headers, f)
        return base

    return _cache


@pytest.fixture
def make_project(tmp_path):
    """
    Create a project directory with a tsconfig.json and optional import map

    Usage:
        project = make_project(imports={'std/': 'https://deno.land/std/'})
    """

    def _make(imports=None, import_map_name="import_map.json", tsconfig=None, subdir="project"):
        project = tmp_path / subdir
        project.mkdir(parents=True, exist_ok=True)
        if tsconfig is None:
            tsconfig = {"compilerOptions": {}}
            if imports is not None:
                tsconfig["denoOptions"] = {"importMap": import_map_name}
        (project / "tsconfig.json").write_text(json.dumps(tsconfig), encoding="utf-8")
        if imports is not None:
            (project / import_map_name).write_text(json.dumps({"imports": imports}), encoding="utf-8")
        return str(project)

    return _make
