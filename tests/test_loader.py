"""Tests for the module loader."""
from functools import partial

import pytest

from sprout.hooks import HookRegistry, ACTION_INIT
from sprout.modules import ErrorCache, Module, ModuleLoader


class RecordingModule(Module):
    name = "recording"
    action = ACTION_INIT
    priority = 10
    load = True

    def __init__(self, hooks, db):
        super().__init__(hooks, db)
        self.loaded = False

    def get_module_name(self):
        return self.name

    def should_load(self):
        return self.load

    async def load_module(self):
        self.loaded = True

    def get_starting_action(self):
        return self.action

    def get_priority(self):
        return self.priority


class LateModule(RecordingModule):
    name = "late"
    priority = 20


class SkippedModule(RecordingModule):
    name = "skipped"
    load = False


class TestBoot:
    def test_registers_modules_on_starting_action(self):
        hooks = HookRegistry()
        modules = ModuleLoader([RecordingModule]).boot(hooks, None)

        assert list(modules) == ["recording"]
        assert hooks.has_action(ACTION_INIT, modules["recording"].load_module)

    def test_skips_modules_that_should_not_load(self):
        hooks = HookRegistry()
        modules = ModuleLoader([RecordingModule, SkippedModule]).boot(hooks, None)
        assert list(modules) == ["recording"]

    def test_skips_disabled_modules(self):
        hooks = HookRegistry()
        loader = ModuleLoader([RecordingModule, LateModule], disabled=["recording"])
        modules = loader.boot(hooks, None)

        assert list(modules) == ["late"]
        assert len(hooks._actions[ACTION_INIT]) == 1

    def test_duplicate_names_raise(self):
        with pytest.raises(ValueError):
            ModuleLoader([RecordingModule, RecordingModule]).boot(HookRegistry(), None)

    def test_factories_receive_extra_arguments(self):
        loader = ModuleLoader([partial(ErrorCache, max_entries=30)])
        modules = loader.boot(HookRegistry(), None)
        assert modules["sprout_errors"].max_entries == 30


@pytest.mark.asyncio
async def test_modules_load_in_priority_order():
    order = []

    class First(RecordingModule):
        name = "first"
        priority = 5

        async def load_module(self):
            order.append(self.name)

    class Second(First):
        name = "second"
        priority = 50

    hooks = HookRegistry()
    ModuleLoader([Second, First]).boot(hooks, None)
    await hooks.do_action(ACTION_INIT)

    assert order == ["first", "second"]
