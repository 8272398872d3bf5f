from shaded_cli_renderer.color import ColorPairCache, parse_hex_color, rgb_to_ansi8, rgb_to_xterm


def test_parse_hex_color():
    assert parse_hex_color("#FFD400") == (255, 212, 0)
    assert parse_hex_color("101010") == (16, 16, 16)
    assert parse_hex_color("  #50ff50 ") == (80, 255, 80)
    assert parse_hex_color("#12345") is None
    assert parse_hex_color("#GGGGGG") is None
    assert parse_hex_color(None) is None


def test_rgb_to_xterm():
    assert rgb_to_xterm(255, 0, 0) == 196
    assert rgb_to_xterm(0, 0, 0) == 16
    assert rgb_to_xterm(255, 255, 255) == 231
    # Mid grays prefer the grayscale ramp
    assert 232 <= rgb_to_xterm(128, 128, 128) <= 255


def test_rgb_to_ansi8():
    assert rgb_to_ansi8(200, 0, 0) == 1
    assert rgb_to_ansi8(0, 0, 0) == 0
    assert rgb_to_ansi8(250, 250, 250) == 7


def test_pair_cache_disabled_until_initialized():
    cache = ColorPairCache()
    assert cache.enabled is False
    cache.init(use_color=False)
    assert cache.enabled is False
