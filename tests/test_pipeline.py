"""Tests for stage ordering and fail-fast abort."""

import json

import pytest

from arch_installer.config import InstallerConfig
from arch_installer.pipeline import InstallContext, PipelineStatus, Stage, run_pipeline
from arch_installer.state_store import new_state
from conftest import ScriptedPrompter


class RecordingStep:
    def __init__(self, stage, log, fail=None):
        self.stage = stage
        self.step_id = f"{stage.value}_{stage.name.lower()}"
        self.log = log
        self.fail = fail

    def run(self, state, ctx):
        self.log.append(self.step_id)
        if self.fail is not None:
            raise self.fail
        return state


@pytest.fixture
def ctx(tmp_path):
    config = InstallerConfig(raw={"intent_log": str(tmp_path / "intents.jsonl")})
    return InstallContext(config=config, prompter=ScriptedPrompter([]))


def test_all_stages_run_in_order(ctx):
    log = []
    steps = [RecordingStep(stage, log) for stage in Stage]
    saved = []

    result = run_pipeline(state=new_state({}), steps=steps, ctx=ctx, checkpoint=lambda s: saved.append(json.dumps(s)))

    assert result.status is PipelineStatus.COMPLETED
    assert log == [s.step_id for s in steps]
    assert result.state["execution"]["completed_steps"] == log
    assert result.state["execution"]["status"] == "completed"
    assert len(saved) == len(steps)


def test_failure_aborts_and_skips_later_stages(ctx):
    log = []
    boom = RuntimeError("mkfs failed")
    steps = [
        RecordingStep(Stage.DISK_PREP, log),
        RecordingStep(Stage.BOOTSTRAP, log, fail=boom),
        RecordingStep(Stage.FSTAB_GEN, log),
        RecordingStep(Stage.FINALIZE, log),
    ]

    result = run_pipeline(state=new_state({}), steps=steps, ctx=ctx)

    assert result.status is PipelineStatus.ABORTED
    assert result.failed_step == "20_bootstrap"
    assert result.error is boom
    assert result.ran_steps == ["10_disk_prep"]
    assert log == ["10_disk_prep", "20_bootstrap"]
    exe = result.state["execution"]
    assert exe["status"] == "aborted"
    assert exe["errors"] == [{"step": "20_bootstrap", "error": "mkfs failed"}]
    assert "20_bootstrap" not in exe["completed_steps"]


def test_out_of_order_steps_rejected_before_running(ctx):
    log = []
    steps = [RecordingStep(Stage.BOOTSTRAP, log), RecordingStep(Stage.DISK_PREP, log)]
    with pytest.raises(ValueError):
        run_pipeline(state=new_state({}), steps=steps, ctx=ctx)
    assert log == []


def test_duplicate_stage_rejected(ctx):
    steps = [RecordingStep(Stage.DISK_PREP, []), RecordingStep(Stage.DISK_PREP, [])]
    with pytest.raises(ValueError):
        run_pipeline(state=new_state({}), steps=steps, ctx=ctx)


def test_interrupt_is_recorded_and_propagated(ctx):
    saved = []
    steps = [RecordingStep(Stage.DISK_PREP, [], fail=KeyboardInterrupt())]
    with pytest.raises(KeyboardInterrupt):
        run_pipeline(state=new_state({}), steps=steps, ctx=ctx, checkpoint=saved.append)
    assert saved[-1]["execution"]["status"] == "aborted"


def test_context_intent_is_tagged_with_current_step(ctx, tmp_path):
    class IntentStep(RecordingStep):
        def run(self, state, ctx):
            ctx.intent("format", partition="/dev/sdb1")
            return state

    run_pipeline(state=new_state({}), steps=[IntentStep(Stage.DISK_PREP, [])], ctx=ctx)

    records = [json.loads(line) for line in (tmp_path / "intents.jsonl").read_text().splitlines()]
    assert len(records) == 1
    assert records[0]["stage"] == "10_disk_prep"
    assert records[0]["action"] == "format"
    assert records[0]["partition"] == "/dev/sdb1"
    assert "timestamp" in records[0]
