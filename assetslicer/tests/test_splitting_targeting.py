"""Tests for the targeting value types.

This module tests:
- OptimizationDimension parsing
- TextureCompressionFormat lookup
- DirectoryTargeting construction and equality
- ApkTargeting suffixes and serialization
- The combine function
"""

import pytest

from assetslicer.exceptions import ConflictingTargetingError, MalformedTargetingError
from assetslicer.splitting.targeting import (
    ApkTargeting,
    DeviceTierTargeting,
    DirectoryTargeting,
    GraphicsApi,
    GraphicsApiTargeting,
    LanguageTargeting,
    OptimizationDimension,
    TextureCompressionFormat,
    TextureCompressionFormatTargeting,
    combine,
)


def lang(*values: str) -> ApkTargeting:
    return ApkTargeting(language=LanguageTargeting(frozenset(values)))


def tcf(*formats: TextureCompressionFormat) -> ApkTargeting:
    return ApkTargeting(
        texture_compression_format=TextureCompressionFormatTargeting(frozenset(formats))
    )


class TestOptimizationDimension:
    """Tests for the OptimizationDimension enum."""

    def test_enum_values(self):
        """Test that all expected dimension values exist."""
        assert OptimizationDimension.LANGUAGE.value == 'language'
        assert (
            OptimizationDimension.TEXTURE_COMPRESSION_FORMAT.value
            == 'texture_compression_format'
        )
        assert OptimizationDimension.GRAPHICS_API.value == 'graphics_api'
        assert OptimizationDimension.DEVICE_TIER.value == 'device_tier'

    def test_parse_is_case_insensitive(self):
        """Test parsing enum member names and values in any case."""
        assert OptimizationDimension.parse('LANGUAGE') == OptimizationDimension.LANGUAGE
        assert OptimizationDimension.parse('Language') == OptimizationDimension.LANGUAGE

    def test_parse_aliases(self):
        """Test short aliases and separator variants."""
        assert (
            OptimizationDimension.parse('tcf')
            == OptimizationDimension.TEXTURE_COMPRESSION_FORMAT
        )
        assert (
            OptimizationDimension.parse('device-tier')
            == OptimizationDimension.DEVICE_TIER
        )
        assert OptimizationDimension.parse('lang') == OptimizationDimension.LANGUAGE
        assert (
            OptimizationDimension.parse('Texture Compression Format')
            == OptimizationDimension.TEXTURE_COMPRESSION_FORMAT
        )

    def test_parse_member_passthrough(self):
        """Test that enum members parse to themselves."""
        assert (
            OptimizationDimension.parse(OptimizationDimension.GRAPHICS_API)
            is OptimizationDimension.GRAPHICS_API
        )

    def test_parse_unknown(self):
        """Test that unknown dimensions raise ValueError."""
        with pytest.raises(ValueError):
            OptimizationDimension.parse('abi')


class TestTextureCompressionFormat:
    """Tests for texture format lookup."""

    def test_from_token(self):
        """Test lookup by directory token."""
        assert TextureCompressionFormat.from_token('etc2') == TextureCompressionFormat.ETC2
        assert TextureCompressionFormat.from_token('3dc') == TextureCompressionFormat.THREE_DC
        assert (
            TextureCompressionFormat.from_token('etc1')
            == TextureCompressionFormat.ETC1_RGB8
        )

    def test_from_member_name(self):
        """Test lookup by member name in any case."""
        assert TextureCompressionFormat.from_token('ASTC') == TextureCompressionFormat.ASTC
        assert (
            TextureCompressionFormat.from_token('three_dc')
            == TextureCompressionFormat.THREE_DC
        )
        assert (
            TextureCompressionFormat.from_token('ETC1_RGB8')
            == TextureCompressionFormat.ETC1_RGB8
        )

    def test_unknown_token(self):
        """Test that unknown formats raise ValueError."""
        with pytest.raises(ValueError, match='unknown texture compression format'):
            TextureCompressionFormat.from_token('bogus')

    def test_token_property(self):
        """Test the token of a format."""
        assert TextureCompressionFormat.PVRTC.token == 'pvrtc'


class TestGraphicsApi:
    """Tests for the GraphicsApi value type."""

    def test_str(self):
        """Test rendering as a directory-style token."""
        assert str(GraphicsApi('opengl', 3, 0)) == 'opengl_3.0'
        assert str(GraphicsApi('vulkan', 1, 1)) == 'vulkan_1.1'

    def test_ordering(self):
        """Test that versions order by api, major, minor."""
        assert GraphicsApi('opengl', 2, 0) < GraphicsApi('opengl', 3, 0)
        assert GraphicsApi('opengl', 3, 0) < GraphicsApi('opengl', 3, 1)

    def test_equality(self):
        """Test structural equality."""
        assert GraphicsApi('opengl', 3) == GraphicsApi('opengl', 3, 0)


class TestDirectoryTargeting:
    """Tests for the DirectoryTargeting record."""

    def test_default(self):
        """Test that an empty targeting is the default."""
        targeting = DirectoryTargeting()
        assert targeting.is_default
        assert targeting.dimensions() == []
        assert str(targeting) == '<default>'

    def test_from_mapping(self):
        """Test building from a mapping with aliases."""
        targeting = DirectoryTargeting.from_mapping({'lang': 'en', 'tcf': 'etc2'})
        assert targeting == DirectoryTargeting(
            language='en', texture_compression_format='etc2'
        )

    def test_from_mapping_skips_none(self):
        """Test that None values count as absent."""
        assert DirectoryTargeting.from_mapping({'language': None}).is_default
        assert DirectoryTargeting.from_mapping(None).is_default
        assert DirectoryTargeting.from_mapping({}).is_default

    def test_from_mapping_unknown_dimension(self):
        """Test that unknown dimension keys are malformed targeting."""
        with pytest.raises(MalformedTargetingError) as exc_info:
            DirectoryTargeting.from_mapping({'abi': 'x86'})
        assert exc_info.value.dimension == 'dimension'
        assert exc_info.value.value == 'abi'

    def test_from_mapping_alias_conflict(self):
        """Test that two spellings of one dimension may not disagree."""
        with pytest.raises(ConflictingTargetingError) as exc_info:
            DirectoryTargeting.from_mapping({'language': 'en', 'lang': 'fr'})
        assert exc_info.value.dimension == 'language'
        assert exc_info.value.left == 'en'
        assert exc_info.value.right == 'fr'

    def test_from_mapping_alias_agreement(self):
        """Test that repeating the same value under an alias is accepted."""
        targeting = DirectoryTargeting.from_mapping({'language': 'en', 'LANG': 'en'})
        assert targeting == DirectoryTargeting(language='en')

    def test_dimensions_in_enum_order(self):
        """Test that assigned dimensions are listed in enum order."""
        targeting = DirectoryTargeting(device_tier=1, language='en')
        assert targeting.dimensions() == [
            OptimizationDimension.LANGUAGE,
            OptimizationDimension.DEVICE_TIER,
        ]
        assert str(targeting) == 'language=en,device_tier=1'

    def test_get(self):
        """Test reading a dimension's value."""
        targeting = DirectoryTargeting(graphics_api='opengl_3.0')
        assert targeting.get(OptimizationDimension.GRAPHICS_API) == 'opengl_3.0'
        assert targeting.get(OptimizationDimension.LANGUAGE) is None

    def test_hashable_structural_key(self):
        """Test that equal targetings collapse as dictionary keys."""
        groups = {DirectoryTargeting(language='en'): 1}
        groups[DirectoryTargeting(language='en')] = 2
        assert len(groups) == 1


class TestApkTargeting:
    """Tests for the ApkTargeting output record."""

    def test_default(self):
        """Test the default targeting."""
        targeting = ApkTargeting()
        assert targeting.is_default
        assert targeting.suffix == ''
        assert targeting.to_dict() == {}
        assert str(targeting) == '<default>'

    def test_language_suffix(self):
        """Test the suffix of a language targeting."""
        assert lang('es').suffix == 'es'

    def test_combined_suffix_in_dimension_order(self):
        """Test that suffixes join in dimension order."""
        targeting = ApkTargeting(
            texture_compression_format=TextureCompressionFormatTargeting(
                frozenset({TextureCompressionFormat.ETC2})
            ),
            language=LanguageTargeting(frozenset({'es'})),
        )
        assert targeting.suffix == 'es_etc2'

    def test_device_tier_and_graphics_suffix(self):
        """Test suffixes of device tier and graphics API targeting."""
        tier = ApkTargeting(device_tier=DeviceTierTargeting(frozenset({1})))
        gl = ApkTargeting(
            graphics_api=GraphicsApiTargeting(frozenset({GraphicsApi('opengl', 3, 0)}))
        )
        assert tier.suffix == 'tier_1'
        assert gl.suffix == 'opengl_3.0'

    def test_to_dict(self):
        """Test the JSON-friendly view."""
        targeting = combine(lang('en'), tcf(TextureCompressionFormat.ASTC))
        assert targeting.to_dict() == {
            'language': ['en'],
            'texture_compression_format': ['astc'],
        }

    def test_sorted_values(self):
        """Test that multi-valued sub-targetings serialize sorted."""
        assert lang('fr', 'de').to_dict() == {'language': ['de', 'fr']}

    def test_equality_and_hash(self):
        """Test structural equality and hashing."""
        assert lang('en') == lang('en')
        assert hash(lang('en')) == hash(lang('en'))
        assert lang('en') != lang('es')


class TestCombine:
    """Tests for the combine function."""

    def test_default_with_default(self):
        """Test that two defaults combine to the default."""
        assert combine(ApkTargeting(), ApkTargeting()) == ApkTargeting()

    def test_default_yields_to_concrete(self):
        """Test that an absent dimension yields to a concrete one on either side."""
        assert combine(ApkTargeting(), lang('en')) == lang('en')
        assert combine(lang('en'), ApkTargeting()) == lang('en')

    def test_equal_values_merge(self):
        """Test that equal values merge to themselves."""
        assert combine(lang('en'), lang('en')) == lang('en')

    def test_disjoint_dimensions_union(self):
        """Test that disjoint dimensions form a union."""
        result = combine(lang('en'), tcf(TextureCompressionFormat.ETC2))
        assert result.language == LanguageTargeting(frozenset({'en'}))
        assert result.texture_compression_format == TextureCompressionFormatTargeting(
            frozenset({TextureCompressionFormat.ETC2})
        )

    def test_conflict_raises(self):
        """Test that clashing values on one dimension fail fast."""
        with pytest.raises(ConflictingTargetingError) as exc_info:
            combine(lang('en'), lang('es'))
        assert exc_info.value.dimension == 'language'
        assert exc_info.value.left == ['en']
        assert exc_info.value.right == ['es']

    def test_conflict_on_one_dimension_of_many(self):
        """Test that a conflict is detected even when other dimensions agree."""
        left = combine(lang('en'), tcf(TextureCompressionFormat.ETC2))
        right = combine(lang('en'), tcf(TextureCompressionFormat.ASTC))
        with pytest.raises(ConflictingTargetingError) as exc_info:
            combine(left, right)
        assert exc_info.value.dimension == 'texture_compression_format'
