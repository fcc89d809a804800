import json

from blockyaml.__main__ import main


def test_ok_with_dump(tmp_path, capsys):
    path = tmp_path / 'doc.yaml'
    path.write_text('a: 1\nb:\n  - x\n  - 2001-12-14\n', encoding='utf-8')
    assert main([str(path), '--dump']) == 0
    out = capsys.readouterr().out
    first, _, rest = out.partition('\n')
    assert first == 'OK: dict'
    assert json.loads(rest) == {'a': 1, 'b': ['x', '2001-12-14']}


def test_failure_reports_line(tmp_path, capsys):
    path = tmp_path / 'bad.yaml'
    path.write_text('a: 1\n\tb: 2\n', encoding='utf-8')
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert err.startswith('FAIL @2: ')


def test_max_depth_option(tmp_path, capsys):
    path = tmp_path / 'deep.yaml'
    path.write_text('a:\n  b:\n    c: 1\n', encoding='utf-8')
    assert main([str(path), '--max-depth', '1']) == 1
    assert 'FAIL @2' in capsys.readouterr().err


def test_load_file(tmp_path):
    from blockyaml import load_file

    path = tmp_path / 'doc.yaml'
    path.write_bytes(b'- &a x\n- *a\n')
    assert load_file(path) == ['x', 'x']
