import math

import pytest

from hmstl.config import ConversionConfig, ZMapping, load_config
from hmstl.errors import ConfigError


def test_defaults():
    cfg = ConversionConfig()
    assert cfg.scale == 1.0
    assert cfg.offset == 1.0
    assert cfg.name == 'heightmap'
    assert cfg.input is None and cfg.output is None
    assert cfg.verbose is False
    assert cfg.zmapping == ZMapping(1.0, 1.0)


@pytest.mark.parametrize('scale', [0, -1, 0.0, float('nan'), float('inf'), 'abc', None, True])
def test_scale_rejected(scale):
    with pytest.raises(ConfigError):
        ZMapping(scale=scale)


@pytest.mark.parametrize('offset', [0.999, 0, -5, float('nan')])
def test_offset_rejected(offset):
    with pytest.raises(ConfigError):
        ZMapping(offset=offset)


def test_offset_lower_bound_accepted():
    zmap = ZMapping(scale=0.5, offset=1.0)
    assert zmap.offset == 1.0
    assert zmap.scale == 0.5


def test_numeric_strings_are_coerced():
    zmap = ZMapping(scale='2.5', offset='3')
    assert zmap.scale == 2.5
    assert zmap.offset == 3.0


def test_z_mapping_applies_offset_after_scale():
    zmap = ZMapping(scale=2.0, offset=1.5)
    assert zmap.z(0) == 1.5
    assert zmap.z(10) == 21.5
    assert zmap(10) == zmap.z(10)


@pytest.mark.parametrize('scale,offset', [(1.0, 1.0), (0.01, 1.0), (3.7, 12.0)])
def test_z_mapping_monotonic(scale, offset):
    zmap = ZMapping(scale, offset)
    values = [zmap.z(s) for s in range(256)]
    assert all(a <= b for a, b in zip(values, values[1:]))
    assert math.isclose(values[0], offset)
    assert math.isclose(values[-1], offset + 255 * scale)


def test_config_validates_on_construction():
    with pytest.raises(ConfigError):
        ConversionConfig(scale=0)
    with pytest.raises(ConfigError):
        ConversionConfig(offset=0.5)
    with pytest.raises(ConfigError):
        ConversionConfig(name='two words')
    with pytest.raises(ConfigError):
        ConversionConfig(name='')


def test_merged_ignores_none():
    cfg = ConversionConfig(scale=2.0, name='terrain')
    merged = cfg.merged(scale=None, offset=4.0, name=None)
    assert merged.scale == 2.0
    assert merged.offset == 4.0
    assert merged.name == 'terrain'


def test_merged_validates():
    with pytest.raises(ConfigError):
        ConversionConfig().merged(scale=-1.0)


def test_load_config(tmp_path):
    path = tmp_path / 'hm.yaml'
    path.write_text('scale: 0.5\noffset: 2\nname: terrain\nverbose: true\n')
    cfg = load_config(path)
    assert cfg.scale == 0.5
    assert cfg.offset == 2.0
    assert cfg.name == 'terrain'
    assert cfg.verbose is True


def test_load_config_empty_file(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert load_config(path) == ConversionConfig()


def test_load_config_unknown_key(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('scale: 1\ncolour: red\n')
    with pytest.raises(ConfigError, match='colour'):
        load_config(path)


def test_load_config_not_mapping(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text('- 1\n- 2\n')
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_invalid_values(tmp_path):
    path = tmp_path / 'neg.yaml'
    path.write_text('scale: -2\n')
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_missing(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / 'nope.yaml')


@pytest.mark.parametrize('name', ['höhe', 'bell\x07', 'tab\tname'])
def test_name_must_be_printable_ascii(name):
    with pytest.raises(ConfigError):
        ConversionConfig(name=name)


def test_paths_accept_strings_and_path_objects(tmp_path):
    cfg = ConversionConfig(input=tmp_path / 'in.pgm', output='-')
    assert cfg.input == str(tmp_path / 'in.pgm')
    assert cfg.output == '-'


@pytest.mark.parametrize('key', ['input', 'output'])
def test_load_config_rejects_non_path(tmp_path, key):
    path = tmp_path / 'hm.yaml'
    path.write_text(f'{key}: 5\n')
    with pytest.raises(ConfigError, match=key):
        load_config(path)


@pytest.mark.parametrize('value', ['"no"', '1', 'off-ish'])
def test_load_config_rejects_non_bool_verbose(tmp_path, value):
    path = tmp_path / 'hm.yaml'
    path.write_text(f'verbose: {value}\n')
    with pytest.raises(ConfigError, match='verbose'):
        load_config(path)


def test_load_config_yaml_bool_verbose(tmp_path):
    path = tmp_path / 'hm.yaml'
    path.write_text('verbose: no\n')
    assert load_config(path).verbose is False
