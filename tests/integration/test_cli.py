"""
CLI end-to-end checks
"""

import json

import pytest

from denoresolve.main_cli import build_parser, main


def _run(capsys, argv):
    main(argv)
    return json.loads(capsys.readouterr().out)


@pytest.mark.integration
def test_resolve_command_outputs_mapping(capsys, make_project, deno_dir, cache_module):
    project = make_project(imports={"std/": "https://deno.land/std/"})
    cached = cache_module("https://deno.land/std/fs/mod.ts", body="export {}")

    result = _run(capsys, ["-p", project, "--deno-dir", deno_dir, "resolve", "std/fs/mod.ts", "./local.ts", "x.js"])

    assert result == {"std/fs/mod.ts": cached, "./local.ts": "./local", "x.js": "x.js"}


@pytest.mark.integration
def test_resolve_command_exits_on_redirect_loop(capsys, tmp_path, deno_dir, cache_module):
    cache_module("https://a.land/mod.ts", headers={"redirect_to": "https://a.land/mod.ts"})
    with pytest.raises(SystemExit) as excinfo:
        main(["-p", str(tmp_path), "--deno-dir", deno_dir, "resolve", "https://a.land/mod.ts"])
    assert excinfo.value.code == 1
    assert "redirect" in capsys.readouterr().err


@pytest.mark.integration
def test_resolve_command_exits_on_malformed_import_map(make_project, deno_dir):
    project = make_project(imports={"std/": "https://deno.land/std/"})
    with open(f"{project}/import_map.json", "w", encoding="utf-8") as f:
        f.write("{")
    with pytest.raises(SystemExit) as excinfo:
        main(["-p", project, "--deno-dir", deno_dir, "resolve", "std/x.ts"])
    assert excinfo.value.code == 1


@pytest.mark.integration
def test_invalid_config_override_exits(tmp_path, deno_dir):
    with pytest.raises(SystemExit) as excinfo:
        main(["-c", "[1]", "-p", str(tmp_path), "--deno-dir", deno_dir, "resolve", "./a.ts"])
    assert excinfo.value.code == 1


@pytest.mark.integration
@pytest.mark.treesitter
def test_scan_command_resolves_file_imports(capsys, make_project, deno_dir, cache_module):
    pytest.importorskip("denoresolve.treewalk.javascript")
    project = make_project(imports={"std/": "https://deno.land/std/"})
    cache_module("https://deno.land/std/old/mod.ts", headers={"redirect_to": "https://deno.land/std/new/mod.ts"})
    target = cache_module("https://deno.land/std/new/mod.ts", body="export {}")
    source = f"{project}/main.ts"
    with open(source, "w", encoding="utf-8") as f:
        f.write('import { a } from "std/old/mod.ts";\nimport "./side.ts?raw";\n')

    result = _run(capsys, ["--deno-dir", deno_dir, "scan", source])

    assert result == {"std/old/mod.ts": target, "./side.ts?raw": "./side.ts"}


@pytest.mark.integration
def test_location_options_accepted_after_subcommand(capsys, make_project, deno_dir, cache_module):
    project = make_project(imports={"std/": "https://deno.land/std/"})
    cached = cache_module("https://deno.land/std/fs/mod.ts", body="export {}")

    result = _run(capsys, ["resolve", "std/fs/mod.ts", "--project", project, "--deno-dir", deno_dir])

    assert result == {"std/fs/mod.ts": cached}


@pytest.mark.integration
def test_location_options_before_subcommand_survive_subparser():
    args = build_parser().parse_args(["-p", "/before", "--deno-dir", "/cache", "resolve", "./a.ts"])
    assert args.project == "/before"
    assert args.deno_dir == "/cache"

    args = build_parser().parse_args(["-p", "/before", "scan", "main.ts", "-p", "/after"])
    assert args.project == "/after"
    assert args.deno_dir is None


@pytest.mark.integration
def test_help_describes_the_tool(capsys):
    with pytest.raises(SystemExit):
        main(["--help"])
    out = capsys.readouterr().out
    assert "Resolve Deno-style module specifiers" in out
    assert "CLI entry point" not in out
