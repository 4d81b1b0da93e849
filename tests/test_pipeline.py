# tests/test_pipeline.py
"""
PIPELINE TESTS: Grammar + Seed -> Network
=========================================

Runs parse, expand and grow together on the demo grammar, and checks the
configuration and logging helpers the scripts rely on.
"""

import logging
from pathlib import Path

import numpy as np

from reservoir_arm import CONFIG, GrowthConfig, MassType, build_network
from reservoir_arm.logging_config import setup_logging

DEMO_GRAMMAR = (Path(__file__).parent.parent / "demos" / "arm.grammar").read_text(encoding="utf-8")


def test_demo_grammar_builds_without_errors():
    result = build_network(DEMO_GRAMMAR, "A(2){B}", np.random.default_rng(42))

    assert not result.has_errors
    assert result.construction == "aac" + "caacc"
    graph = result.model.graph
    assert graph.shoulder() is result.model.shoulder
    assert len(graph.masses_of_type(MassType.ARM_SEGMENT)) == 2
    for mass in graph.network_masses():
        assert graph.springs_of(mass)


def test_errors_of_every_stage_are_reported():
    result = build_network("shoulder 0 0\nnonsense\ninput 0 1\ncreateMass a [1, 2]",
                           "a1x", np.random.default_rng(0))

    assert result.has_errors
    assert [e.line_index for e in result.grammar_errors] == [1]
    assert [e.line_index for e in result.seed_errors] == [1]
    assert [e.message for e in result.construction_errors] == [
        "Unknown construction symbol: 1", "Unknown construction symbol: x",
    ]


def test_default_rng_is_reproducible():
    first = build_network(DEMO_GRAMMAR, "A(3){B}")
    second = build_network(DEMO_GRAMMAR, "A(3){B}")
    assert [(m.x, m.y) for m in first.model.graph.masses] == \
        [(m.x, m.y) for m in second.model.graph.masses]


def test_config_defaults():
    assert CONFIG.max_expansion_length == 1000
    assert CONFIG.too_long_output_text == "The output gets too long!"
    assert CONFIG.max_random_spring_attempts == 1000
    assert CONFIG.input_choice_probability == 0.2
    assert GrowthConfig(default_seed=1).default_seed == 1


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))

    assert logger.name == "reservoir_arm"
    assert len(logger.handlers) == 2

    logging.getLogger("reservoir_arm.pipeline").debug("hello from the pipeline")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the pipeline" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
