"""
Directive parser tests

Tests delimiter handling, field splitting, and mapping fields onto a
KCLRender record.
"""

import pytest

from mdbook_kcl.config import AppSettings
from mdbook_kcl.lib.parser import payload_extract, fields_split, directive_parse
from mdbook_kcl.models.directives import KCLRender, DirectiveSyntaxError


class TestPayloadExtract:
    """Test cutting the field list out of a directive"""

    def test_standard_directive(self):
        """Spaces after the prefix and before --> are dropped"""
        payload = payload_extract("<!-- KCL: name=pill_2d,skip3d=false -->")
        assert payload == "name=pill_2d,skip3d=false"

    def test_surrounding_whitespace(self):
        """Trailing newline from the HTML block is ignored"""
        payload = payload_extract("<!-- KCL: name=a   -->\n")
        assert payload == "name=a"

    def test_no_space_before_suffix(self):
        """Whitespace before --> is optional"""
        assert payload_extract("<!-- KCL:name=a-->") == "name=a"

    def test_missing_closing_delimiter(self):
        """No --> means not a directive"""
        assert payload_extract("<!-- KCL: name=foo") is None

    def test_text_after_closing_delimiter(self):
        """--> must close the whole block"""
        assert payload_extract("<!-- KCL: name=foo --> trailing") is None

    def test_wrong_prefix(self):
        """Other comments are not directives"""
        assert payload_extract("<!-- note: name=foo -->") is None

    def test_prefix_case_sensitive(self):
        """The KCL tag is matched exactly"""
        assert payload_extract("<!-- kcl: name=foo -->") is None


class TestFieldsSplit:
    """Test splitting a field list into pairs"""

    def test_single_field(self):
        assert fields_split("name=a") == [("name", "a")]

    def test_multiple_fields_in_order(self):
        assert fields_split("name=a,alt=b,skip3d=true") == [
            ("name", "a"),
            ("alt", "b"),
            ("skip3d", "true"),
        ]

    def test_split_on_first_equals(self):
        """Values may contain '='"""
        assert fields_split("alt=a=b") == [("alt", "a=b")]

    def test_empty_value(self):
        assert fields_split("alt=") == [("alt", "")]

    def test_field_without_equals(self):
        """A bare entry is a hard error"""
        with pytest.raises(DirectiveSyntaxError, match="badfield"):
            fields_split("name=x,badfield")

    def test_syntax_error_subclass(self):
        """DirectiveSyntaxError is a SyntaxError"""
        with pytest.raises(SyntaxError):
            fields_split("oops")


class TestDirectiveParse:
    """Test building KCLRender records"""

    def test_all_fields(self):
        render = directive_parse(
            "name=pill_2d,skip3d=false,alt=Alt text description cannot contain commas"
        )
        assert render == KCLRender(
            name="pill_2d",
            alt="Alt text description cannot contain commas",
            skip3d=False,
        )

    def test_alt_is_trimmed(self):
        render = directive_parse("name=a,alt=   padded alt  ")
        assert render.alt == "padded alt"

    def test_name_is_not_trimmed(self):
        render = directive_parse("name= spaced ,alt=x")
        assert render.name == " spaced "

    def test_last_field_wins(self):
        """Repeated keys overwrite earlier ones"""
        render = directive_parse("name=a,name=b")
        assert render.name == "b"

    def test_field_order_irrelevant(self):
        first = directive_parse("alt=x,skip3d=true,name=n")
        second = directive_parse("name=n,skip3d=true,alt=x")
        assert first == second

    def test_skip3d_defaults_false(self):
        render = directive_parse("name=x,alt=y")
        assert render.skip3d is False

    def test_skip3d_true(self):
        assert directive_parse("name=x,skip3d=true").skip3d is True

    def test_skip3d_wrong_case_is_false(self):
        """Only the exact lowercase 'true' is truthy"""
        assert directive_parse("name=x,skip3d=TRUE").skip3d is False
        assert directive_parse("name=x,skip3d=True").skip3d is False

    def test_skip3d_other_values_false(self):
        assert directive_parse("name=x,skip3d=yes").skip3d is False
        assert directive_parse("name=x,skip3d=1").skip3d is False
        assert directive_parse("name=x,skip3d= true").skip3d is False

    def test_unknown_keys_ignored(self):
        render = directive_parse("name=x,color=red,alt=y")
        assert render == KCLRender(name="x", alt="y", skip3d=False)

    def test_missing_name_defaults_empty(self):
        """Without strict mode a missing name is accepted"""
        render = directive_parse("alt=y", AppSettings(strict_mode=False))
        assert render.name == ""
        assert render.gltf_path == "gltf//output.gltf"

    def test_missing_name_strict(self):
        """Strict mode rejects a directive without a name"""
        with pytest.raises(DirectiveSyntaxError, match="no name"):
            directive_parse("alt=y", AppSettings(strict_mode=True))

    def test_malformed_field_propagates(self):
        with pytest.raises(DirectiveSyntaxError):
            directive_parse("name=x,badfield")


class TestRenderPaths:
    """Test asset paths derived from the record"""

    def test_paths(self):
        render = KCLRender(name="gear", alt="A gear")
        assert render.gltf_path == "gltf/gear/output.gltf"
        assert render.image_path == "images/dynamic/gear.png"
        assert render.fallback_text == "2D fallback: A gear"
