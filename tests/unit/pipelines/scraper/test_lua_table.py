"""Tests for the Lua table literal parser."""

import pytest

from cdragon_assets.core.exceptions import LuaParseError
from cdragon_assets.pipelines.scraper.lua_table import LuaTableParser, parse_lua_table


class TestLuaTableParser:
    """Test the supported Lua subset."""

    def test_bracketed_and_bare_keys(self):
        result = parse_lua_table('{ ["name"] = "Aatrox", id = 266, [1] = "first" }')

        assert result == {"name": "Aatrox", "id": 266, "1": "first"}

    def test_return_prefix_and_comments(self):
        source = """
        -- leading comment
        return {
            --[[ block
                 comment ]]
            ["a"] = 1, -- trailing
        }
        """

        assert parse_lua_table(source) == {"a": 1}

    def test_nested_chromas(self):
        source = """{
            ["Aatrox"] = {
                ["id"] = 266,
                ["skins"] = {
                    ["Justicar Aatrox"] = {
                        ["id"] = 1,
                        ["chromas"] = {
                            ["Ruby"] = { ["id"] = 266002, ["availability"] = "Available" },
                        },
                    },
                },
            },
        }"""

        result = parse_lua_table(source)

        chroma = result["Aatrox"]["skins"]["Justicar Aatrox"]["chromas"]["Ruby"]
        assert chroma == {"id": 266002, "availability": "Available"}

    def test_positional_entries_become_list(self):
        assert parse_lua_table('{"Justicar", "Arcade"; "Gothic"}') == ["Justicar", "Arcade", "Gothic"]

    def test_empty_table(self):
        assert parse_lua_table("{}") == {}

    def test_mixed_table_numbers_positional_entries(self):
        assert parse_lua_table('{ "a", key = "b" }') == {"key": "b", "1": "a"}

    def test_scalars(self):
        result = parse_lua_table(
            "{ t = true, f = false, n = nil, neg = -5, hex = 0x1F, flt = 2.5, exp = 1e3 }"
        )

        assert result["t"] is True
        assert result["f"] is False
        assert result["n"] is None
        assert result["neg"] == -5
        assert result["hex"] == 31
        assert result["flt"] == 2.5
        assert result["exp"] == 1000.0

    def test_numeric_and_boolean_keys_are_stringified(self):
        result = parse_lua_table("{ [266] = 'a', [1.0] = 'b', [true] = 'c' }")

        assert result == {"266": "a", "1": "b", "true": "c"}

    def test_string_escapes(self):
        result = parse_lua_table(r'{ s = "line\nbreak \"quoted\" \65", q = ' + "'it\\'s' }")

        assert result["s"] == 'line\nbreak "quoted" A'
        assert result["q"] == "it's"

    def test_hex_and_unicode_escapes(self):
        result = parse_lua_table(r'{"\x41", "caf\u{E9}", "\u{1F600}"}')

        assert result == ["A", "café", "\U0001F600"]

    def test_z_escape_skips_line_breaks(self):
        parser = LuaTableParser('{ s = "first \\z\n        second" }')

        assert parser.parse() == {"s": "first second"}
        assert parser.repairs == 0

    @pytest.mark.parametrize("source", [r'{"\xZZ"}', r'{"\u{}"}', r'{"\u{110000}"}'])
    def test_invalid_escapes_raise(self, source):
        with pytest.raises(LuaParseError):
            parse_lua_table(source)

    def test_long_strings(self):
        source = "{ lore = [[\nFirst line\nsecond \"line\"]], deep = [==[a ]] b]==] }"

        result = parse_lua_table(source)

        assert result["lore"] == 'First line\nsecond "line"'
        assert result["deep"] == "a ]] b"

    def test_unterminated_string_is_closed_at_line_end(self):
        source = '{\n  ["lore"] = "A story that never ends,\n  ["id"] = 3,\n}'
        parser = LuaTableParser(source)

        result = parser.parse()

        assert result == {"lore": "A story that never ends", "id": 3}
        assert parser.repairs == 1

    def test_unterminated_string_at_end_of_input(self):
        parser = LuaTableParser('"dangling')

        assert parser.parse() == "dangling"
        assert parser.repairs == 1

    def test_missing_separator_raises(self):
        with pytest.raises(LuaParseError) as exc_info:
            parse_lua_table('{ a = 1 b = 2 }')

        assert exc_info.value.position > 0

    def test_unterminated_table_raises(self):
        with pytest.raises(LuaParseError):
            parse_lua_table('{ a = { b = 1 }')

    def test_trailing_garbage_raises(self):
        with pytest.raises(LuaParseError):
            parse_lua_table("{ a = 1 } extra")

    def test_unknown_token_raises(self):
        with pytest.raises(LuaParseError):
            parse_lua_table("{ a = function() end }")
