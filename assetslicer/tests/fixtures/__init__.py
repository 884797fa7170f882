"""Test fixtures for assetslicer tests.

This module provides sample module descriptions and small builders used
across the splitting tests.
"""

from assetslicer.model import AssetModule
from assetslicer.splitting.targeting import DirectoryTargeting

# Module with only untargeted assets
SINGLE_DIRECTORY_MODULE = {
    'name': 'testModule',
    'files': ['assets/image.jpg', 'assets/image2.jpg'],
}

# Untargeted images plus two language variants
LANGUAGE_MODULE = {
    'name': 'testModule',
    'files': [
        'assets/images/image.jpg',
        'assets/images#lang_en/image.jpg',
        'assets/images#lang_es/image.jpg',
    ],
    'directories': {
        'assets/images': {},
        'assets/images#lang_es': {'language': 'es'},
        'assets/images#lang_en': {'language': 'en'},
    },
}

# Language and texture format varying independently; only three of the
# four (language, format) combinations occur.
MULTI_DIMENSION_MODULE = {
    'name': 'game',
    'files': [
        'assets/common/readme.txt',
        'assets/tex#lang_en#tcf_etc2/a.ktx',
        'assets/tex#lang_en#tcf_astc/a.ktx',
        'assets/tex#lang_fr#tcf_etc2/a.ktx',
        'assets/voice#lang_en/hello.ogg',
        'assets/textures#tcf_astc/b.ktx',
    ],
    'directories': {
        'assets/tex#lang_en#tcf_etc2': {
            'language': 'en',
            'texture_compression_format': 'etc2',
        },
        'assets/tex#lang_en#tcf_astc': {
            'language': 'en',
            'texture_compression_format': 'astc',
        },
        'assets/tex#lang_fr#tcf_etc2': {
            'language': 'fr',
            'texture_compression_format': 'etc2',
        },
        'assets/voice#lang_en': {'language': 'en'},
        'assets/textures#tcf_astc': {'texture_compression_format': 'astc'},
    },
}

# Only targeted directories, no untargeted content at all
TARGETED_ONLY_MODULE = {
    'name': 'voices',
    'files': [
        'assets/voice#lang_de/a.ogg',
        'assets/voice#lang_it/a.ogg',
    ],
    'directories': {
        'assets/voice#lang_de': {'language': 'de'},
        'assets/voice#lang_it': {'language': 'it'},
    },
}

# Graphics API and device tier targeting
GRAPHICS_MODULE = {
    'name': 'graphics',
    'files': [
        'assets/shaders/base.glsl',
        'assets/shaders#opengl_3.0/fx.glsl',
        'assets/shaders#vulkan_1.1/fx.spv',
        'assets/models#tier_1/hi.mesh',
        'assets/models#tier_0/lo.mesh',
    ],
    'directories': {
        'assets/shaders#opengl_3.0': {'graphics_api': 'opengl_3.0'},
        'assets/shaders#vulkan_1.1': {'graphics_api': 'vulkan_1.1'},
        'assets/models#tier_1': {'device_tier': 1},
        'assets/models#tier_0': {'device_tier': 0},
    },
}


def make_module(description: dict) -> AssetModule:
    """Build an AssetModule from one of the sample descriptions."""
    targeting = {
        path: DirectoryTargeting.from_mapping(values)
        for path, values in description.get('directories', {}).items()
    }
    return AssetModule.from_files(
        description['name'], description.get('files', []), targeting
    )


def split_files(splits) -> list[str]:
    """All files across a split list, in split order."""
    return [f for split in splits for f in split.files]
