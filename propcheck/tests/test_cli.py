"""Tests for the propcheck command line."""

from propcheck import transform_file
from propcheck.__main__ import iter_source_files, main

COMPONENT = """\
function Foo() {}
Foo.propTypes = {};
"""

PLAIN = "export const answer = 42;\n"


class TestIterSourceFiles:
    def test_walks_directories(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "App.jsx").write_text(COMPONENT)
        (tmp_path / "src" / "notes.md").write_text("# notes\n")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "lib.js").write_text(PLAIN)
        (tmp_path / "index.js").write_text(PLAIN)

        found = sorted(path.relative_to(tmp_path).as_posix() for path in iter_source_files([str(tmp_path)]))
        assert found == ["index.js", "src/App.jsx"]

    def test_explicit_files_are_kept(self, tmp_path):
        path = tmp_path / "component.txt"
        assert list(iter_source_files([str(path)])) == [path]


class TestMain:
    def test_prints_to_stdout(self, tmp_path, capsys):
        path = tmp_path / "Foo.js"
        path.write_text(COMPONENT)

        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert out.startswith('import _checkPropTypes from "prop-types/checkPropTypes";\n')
        assert path.read_text() == COMPONENT

    def test_in_place(self, tmp_path):
        changed = tmp_path / "Foo.js"
        changed.write_text(COMPONENT)
        untouched = tmp_path / "plain.js"
        untouched.write_text(PLAIN)

        assert main([str(tmp_path), "--in-place"]) == 0
        assert "_checkPropTypes(Foo.propTypes, arguments[0]" in changed.read_text()
        assert untouched.read_text() == PLAIN

    def test_out_dir(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "Foo.js").write_text(COMPONENT)
        out_dir = tmp_path / "out"

        assert main([str(src), "--out-dir", str(out_dir), "--cwd", str(tmp_path)]) == 0
        assert "_checkPropTypes(" in (out_dir / "src" / "Foo.js").read_text()
        assert (src / "Foo.js").read_text() == COMPONENT

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "propcheck.yaml"
        config.write_text("classComponentExtends:\n  - AppComponent\n")
        path = tmp_path / "Foo.js"
        path.write_text(
            "class Foo extends AppComponent {\n"
            "  render() {\n"
            "    return null;\n"
            "  }\n"
            "}\n"
            "Foo.propTypes = {};\n"
        )

        assert main([str(path), "--config", str(config)]) == 0
        captured = capsys.readouterr()
        assert "_checkPropTypes(this.constructor.propTypes, this.props" in captured.out
        assert captured.err == ""

    def test_diagnostics_name_file_relative_to_cwd(self, tmp_path, capsys):
        path = tmp_path / "Foo.js"
        path.write_text("Foo.propTypes = {};\n")

        assert main([str(path), "--cwd", str(tmp_path)]) == 0
        err = capsys.readouterr().err
        assert 'Ignored propTypes at "Foo.js" file 1 line 0 column for reference "Foo"' in err

    def test_missing_file_fails(self, tmp_path):
        assert main([str(tmp_path / "missing.js")]) == 1


class TestTransformFile:
    def test_unreadable_file(self, tmp_path):
        result = transform_file(str(tmp_path / "missing.js"), str(tmp_path))
        assert result.code == ""
        assert result.file_path == "missing.js"
        assert result.errors[0].severity == "error"
