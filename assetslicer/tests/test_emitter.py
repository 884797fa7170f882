"""Tests for the split plan emitter."""

import json

import pytest

from assetslicer.emitter import PLAN_VERSION, SplitPlanEmitter
from assetslicer.exceptions import OutputError
from assetslicer.splitting import split_module

from .fixtures import LANGUAGE_MODULE, make_module


@pytest.fixture
def language_splits():
    module = make_module(LANGUAGE_MODULE)
    return module, split_module(module, ['language'])


class TestSplitPlanEmitter:
    """Tests for the SplitPlanEmitter class."""

    def test_render(self, tmp_path, language_splits):
        """Test the plan document without writing it."""
        module, splits = language_splits
        plan = SplitPlanEmitter(tmp_path).render(module, splits)

        assert plan['version'] == PLAN_VERSION
        assert plan['module'] == 'testModule'
        assert plan['file_count'] == 3
        assert [s['split_id'] for s in plan['splits']] == [
            'testModule',
            'testModule.config.en',
            'testModule.config.es',
        ]
        assert plan['splits'][0]['master'] is True
        assert plan['splits'][0]['targeting'] == {}
        assert plan['splits'][1]['targeting'] == {'language': ['en']}

    def test_emit_writes_plan(self, tmp_path, language_splits):
        """Test that the plan is written as JSON."""
        module, splits = language_splits
        emitted = SplitPlanEmitter(tmp_path / 'out').emit(module, splits)

        path = tmp_path / 'out' / 'testModule.splits.json'
        assert path.exists()
        assert str(emitted.path).endswith('testModule.splits.json')
        assert emitted.module_name == 'testModule'
        assert emitted.split_ids == [s.split_id for s in splits]

        content = json.loads(path.read_text())
        assert content['splits'][2]['files'] == ['assets/images#lang_es/image.jpg']

    def test_emit_compact(self, tmp_path, language_splits):
        """Test writing compact JSON."""
        module, splits = language_splits
        SplitPlanEmitter(tmp_path, indent=None).emit(module, splits)

        text = (tmp_path / 'testModule.splits.json').read_text()
        assert text.count('\n') == 1

    def test_emit_failure(self, tmp_path, language_splits):
        """Test that write failures become OutputError."""
        module, splits = language_splits
        blocker = tmp_path / 'blocker'
        blocker.write_text('not a directory')

        with pytest.raises(OutputError) as exc_info:
            SplitPlanEmitter(blocker / 'sub').emit(module, splits)
        assert 'testModule.splits.json' in exc_info.value.output_path
        assert isinstance(exc_info.value.cause, OSError)
