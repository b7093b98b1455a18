"""Tests for GenerationConfig."""

from pysimgen.core.config import GenerationConfig


class TestDefaults:

    def test_default_frequencies(self):
        config = GenerationConfig()
        assert (config.create_weight, config.select_weight, config.insert_weight, config.delete_weight) == (1, 100, 100, 0)

    def test_default_knobs(self):
        config = GenerationConfig()
        assert config.and_probability == 0.7
        assert config.max_fanout == 3
        assert config.max_insert_rows == 10
        assert config.seed is None


class TestClamping:

    def test_probability_clamped(self):
        assert GenerationConfig(and_probability=1.5).and_probability == 1.0
        assert GenerationConfig(and_probability=-1).and_probability == 0.0

    def test_negative_weights_clamped(self):
        assert GenerationConfig(select_weight=-3).select_weight == 0.0

    def test_sizes_clamped(self):
        config = GenerationConfig(max_fanout=-1, max_insert_rows=0, max_columns=0)
        assert config.max_fanout == 0
        assert config.max_insert_rows == 2
        assert config.max_columns == 1


class TestFromEnv:

    def test_reads_prefixed_variables(self):
        env = {
            "PYSIMGEN_SEED": "17",
            "PYSIMGEN_DELETE_WEIGHT": "5",
            "PYSIMGEN_AND_PROBABILITY": "0.25",
            "PYSIMGEN_MAX_FANOUT": "2",
            "UNRELATED": "x",
        }
        config = GenerationConfig.from_env(env)
        assert config.seed == 17
        assert config.delete_weight == 5.0
        assert config.and_probability == 0.25
        assert config.max_fanout == 2

    def test_empty_values_ignored(self):
        config = GenerationConfig.from_env({"PYSIMGEN_SEED": ""})
        assert config.seed is None

    def test_overrides_win(self):
        config = GenerationConfig.from_env({"PYSIMGEN_SEED": "1"}, seed=2, delete_weight=None)
        assert config.seed == 2
        assert config.delete_weight == 0.0

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("PYSIMGEN_INSERT_WEIGHT", "7")
        assert GenerationConfig.from_env().insert_weight == 7.0
