import io
import logging

import pytest

from hmstl.cli import build_parser, main
from hmstl.io.stl import read_ascii_facets
from hmstl.solid import expected_triangle_count


def _write_pgm(path, width, height, payload):
    path.write_bytes(f"P5\n{width} {height}\n255\n".encode('ascii') + bytes(payload))
    return path


class _Stdin:
    def __init__(self, data):
        self.buffer = io.BytesIO(data)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.scale is None
    assert args.offset is None
    assert args.input is None
    assert args.output is None
    assert args.verbose is None


def test_convert_file_to_file(tmp_path):
    src = _write_pgm(tmp_path / 'in.pgm', 3, 2, [0, 128, 255, 10, 20, 30])
    dst = tmp_path / 'out.stl'
    assert main(['-i', str(src), '-o', str(dst), '-z', '0.5', '-b', '2', '-n', 'relief']) == 0

    text = dst.read_text()
    assert text.startswith('solid relief\n')
    assert text.endswith('endsolid relief\n')
    tris = read_ascii_facets(text)
    assert len(tris) == expected_triangle_count(3, 2)
    zs = {v[2] for t in tris for v in t.vertices}
    assert max(zs) == 2.0 + 0.5 * 255
    assert min(zs) == 0.0


def test_stdin_to_stdout(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', _Stdin(b"P5\n2 2\n255\n" + bytes([0, 255, 255, 0])))
    assert main([]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith('solid heightmap\n')
    assert len(read_ascii_facets(captured.out)) == 12
    assert captured.err == ''


def test_verbose_reports_on_stderr(tmp_path, capsys):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [3, 200, 50, 9])
    assert main(['-v', '-i', str(src)]) == 0
    captured = capsys.readouterr()
    for line in ['Width: 2', 'Height: 2', 'Size: 4', 'Min: 3', 'Max: 200', 'Range: 197']:
        assert line in captured.err
    assert 'Width' not in captured.out
    assert captured.out.startswith('solid heightmap\n')


@pytest.mark.parametrize('argv', [['-z', '0'], ['-z', '-1'], ['-b', '0.999']])
def test_invalid_parameters(argv, capsys):
    assert main(argv) == 1
    assert 'error:' in capsys.readouterr().err


def test_offset_one_accepted(tmp_path):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [1, 2, 3, 4])
    assert main(['-b', '1.0', '-i', str(src), '-o', str(tmp_path / 'o.stl')]) == 0


def test_non_numeric_scale_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(['-z', 'tall'])
    assert excinfo.value.code == 2


def test_extraneous_arguments_rejected():
    with pytest.raises(SystemExit) as excinfo:
        main(['stray'])
    assert excinfo.value.code == 2


def test_missing_input(tmp_path, capsys):
    assert main(['-i', str(tmp_path / 'nope.pgm')]) == 1
    assert 'cannot open input file' in capsys.readouterr().err


def test_unwritable_output(tmp_path, capsys):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [1, 2, 3, 4])
    assert main(['-i', str(src), '-o', str(tmp_path / 'no' / 'dir.stl')]) == 1
    assert 'cannot open output file' in capsys.readouterr().err


def test_config_file_with_override(tmp_path):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [0, 0, 0, 10])
    dst = tmp_path / 'out.stl'
    cfg = tmp_path / 'hm.yaml'
    cfg.write_text(f"scale: 3\noffset: 5\nname: fromfile\ninput: {src}\noutput: {dst}\n")

    assert main(['-c', str(cfg), '-z', '2']) == 0
    text = dst.read_text()
    assert text.startswith('solid fromfile\n')
    zs = {v[2] for t in read_ascii_facets(text) for v in t.vertices}
    assert max(zs) == 5.0 + 2.0 * 10


def test_bad_config_file(tmp_path, capsys):
    cfg = tmp_path / 'hm.yaml'
    cfg.write_text('scale: 0\n')
    assert main(['-c', str(cfg)]) == 1
    assert 'scale' in capsys.readouterr().err


def test_non_ascii_name_is_config_error(tmp_path, capsys):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [1, 2, 3, 4])
    dst = tmp_path / 'out.stl'
    assert main(['-i', str(src), '-o', str(dst), '-n', 'höhe']) == 1
    assert 'solid name' in capsys.readouterr().err
    assert not dst.exists()


def test_unopenable_log_file(tmp_path, capsys):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [1, 2, 3, 4])
    log_path = tmp_path / 'no' / 'x.log'
    rc = main(['-i', str(src), '-o', str(tmp_path / 'o.stl'), '--log-file', str(log_path)])
    assert rc == 1
    assert 'cannot open log file' in capsys.readouterr().err


def test_log_file_written(tmp_path):
    src = _write_pgm(tmp_path / 'in.pgm', 2, 2, [1, 2, 3, 4])
    log_path = tmp_path / 'run.log'
    assert main(['-v', '-i', str(src), '-o', str(tmp_path / 'o.stl'), '--log-file', str(log_path)]) == 0
    for handler in list(logging.getLogger('hmstl').handlers):
        handler.close()
    assert 'Width: 2' in log_path.read_text()


def test_config_input_must_be_path(tmp_path, capsys):
    cfg = tmp_path / 'hm.yaml'
    cfg.write_text('input: 5\n')
    assert main(['-c', str(cfg)]) == 1
    assert 'input' in capsys.readouterr().err
