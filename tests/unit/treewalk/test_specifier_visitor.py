"""
Specifier extraction from JavaScript/TypeScript sources
"""

import pytest

from denoresolve.common.defaults import ConfigOverride
from denoresolve.common.file_helpers import FileOperationError

javascript = pytest.importorskip("denoresolve.treewalk.javascript")

TS_SOURCE = """\
import { serve } from "https://deno.land/std/http/server.ts";
import * as path from 'std/path/mod.ts';
import type { Config } from "./config.ts";
import "./polyfill.ts";
export { helper } from "./utils/helpers.ts";
export const local = 1;

async function load() {
  const mod = await import("./lazy.ts?v=2");
  return mod;
}

serve(() => new Response("ok"));
import { serve as again } from "https://deno.land/std/http/server.ts";
"""


@pytest.mark.unit
@pytest.mark.treesitter
def test_extracts_specifiers_in_document_order():
    specifiers = javascript.extract_specifiers(TS_SOURCE, "typescript")
    assert specifiers == [
        "https://deno.land/std/http/server.ts",
        "std/path/mod.ts",
        "./config.ts",
        "./polyfill.ts",
        "./utils/helpers.ts",
        "./lazy.ts?v=2",
    ]


@pytest.mark.unit
@pytest.mark.treesitter
def test_extracts_require_calls(tree_parser, logger):
    code = "const fs = require('fs');\nconst { a } = require(\"./a.js\");\nfoo(require('./b'));\n"
    visitor = javascript.SpecifierVisitor(logger)
    visitor.visit(tree_parser("javascript", code))
    assert visitor.specifiers == ["fs", "./a.js", "./b"]


@pytest.mark.unit
@pytest.mark.treesitter
def test_ignores_non_literal_dynamic_imports():
    code = "const name = './x.ts';\nawait import(name);\nawait import(`./${name}`);\n"
    assert javascript.extract_specifiers(code, "typescript") == []


@pytest.mark.unit
@pytest.mark.treesitter
def test_extract_from_file_picks_grammar(tmp_path):
    source = tmp_path / "view.tsx"
    source.write_text('import React from "https://esm.sh/react";\nexport const V = () => <div/>;\n', encoding="utf-8")
    assert javascript.extract_specifiers_from_file(str(source)) == ["https://esm.sh/react"]


@pytest.mark.unit
@pytest.mark.treesitter
def test_extract_from_file_respects_size_limit(tmp_path):
    source = tmp_path / "big.ts"
    source.write_text("import './a.ts';\n" * 10, encoding="utf-8")
    with ConfigOverride({"MAX_FILE_SIZE": 10}):
        with pytest.raises(FileOperationError):
            javascript.extract_specifiers_from_file(str(source))
