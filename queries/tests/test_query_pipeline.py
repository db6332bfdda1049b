"""
Tests for the end-to-end query pipeline.

Run with: python -m pytest queries/tests/test_query_pipeline.py -v
"""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.exceptions import ConfigurationError
from queries.services.entity_extractor import EntityType, PriceRange
from queries.services.filter_synthesizer import entities_to_filters
from queries.services.intent_classifier import SearchIntent
from queries.services.query_pipeline import ProcessedQuery, QueryPipeline, get_query_pipeline
from xpertsearch.config import AppConfig, AugmentationConfig, PipelineConfig
from .conftest import StubAugmentation


QUERIES = [
    "casual blu jeans under $30",
    "red dress under $50",
    "buy nike shoes",
    "compare wool sweters",
    "black leather jacket xl party under $200",
    "silk scarf",
    "",
]


@pytest.fixture
def pipeline(dictionary):
    return QueryPipeline(dictionary)


class TestProcess:

    def test_end_to_end(self, pipeline):
        result = pipeline.process("casual blu jeans under $30")

        assert result.original == "casual blu jeans under $30"
        assert result.corrected == "casual blue jeans under $30"
        assert result.intent == SearchIntent.PRODUCT_SEARCH
        assert [(e.type, e.value) for e in result.entities] == [
            (EntityType.PRICE, PriceRange(max=30)),
            (EntityType.COLOR, "blue"),
            (EntityType.CATEGORY, "jeans"),
            (EntityType.OCCASION, "casual"),
        ]
        assert result.expanded_terms == (
            "casual blue jeans under $30", "navy", "azure", "cobalt", "sapphire",
        )
        assert result.filters.to_dict() == {
            "price_range": {"max": 30},
            "colors": ["blue"],
            "product_type": "jeans",
            "tags": ["casual"],
        }

    def test_intent_is_case_insensitive(self, pipeline):
        assert pipeline.process("NIKE shoes").intent == SearchIntent.NAVIGATIONAL

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_input(self, pipeline, query):
        result = pipeline.process(query)
        assert result.original == query
        assert result.corrected == ""
        assert result.intent == SearchIntent.PRODUCT_SEARCH
        assert result.entities == ()
        assert result.expanded_terms == ("",)
        assert result.filters.is_empty()

    def test_none_input(self, pipeline):
        result = pipeline.process(None)
        assert result.original == ""
        assert result.corrected == ""

    def test_filters_follow_entities(self, pipeline):
        for query in QUERIES:
            result = pipeline.process(query)
            assert result.filters == entities_to_filters(result.entities)

    def test_deterministic(self, pipeline):
        for query in QUERIES:
            assert pipeline.process(query) == pipeline.process(query)

    def test_result_is_frozen(self, pipeline):
        result = pipeline.process("red dress")
        with pytest.raises(AttributeError):
            result.corrected = "blue dress"

    def test_logs_summary(self, pipeline, caplog):
        with caplog.at_level("INFO", logger="queries.services.query_pipeline"):
            pipeline.process("red dress")
        assert "intent=product_search entities=2 expanded=8" in caplog.text


class TestPriceThroughCorrection:
    """Short price keywords are fuzz-corrected before extraction sees them."""

    @pytest.mark.parametrize("query, corrected", [
        ("$20 to $40 jacket", "$20 tie $40 jacket"),
        ("jacket below $30", "jacket belt $30"),
        ("jacket less than $30", "jacket dress hat $30"),
    ])
    def test_keyword_rewritten_and_price_lost(self, pipeline, query, corrected):
        result = pipeline.process(query)
        assert result.corrected == corrected
        assert EntityType.PRICE not in [e.type for e in result.entities]
        assert result.filters.price_range is None

    def test_under_survives(self, pipeline):
        result = pipeline.process("jacket under $30")
        assert result.corrected == "jacket under $30"
        assert result.filters.price_range == PriceRange(max=30)

    def test_min_token_length_keeps_keywords(self, dictionary):
        pipeline = QueryPipeline(dictionary, spell_min_token_length=6)
        result = pipeline.process("$20 to $40 jacket")
        assert result.corrected == "$20 to $40 jacket"
        assert result.filters.price_range == PriceRange(min=20, max=40)


class TestAugmentation:

    @pytest.mark.parametrize("query", QUERIES)
    def test_failure_matches_absent_service(self, dictionary, failing_augmentation, query):
        with_failure = QueryPipeline(dictionary, failing_augmentation)
        without = QueryPipeline(dictionary)
        assert with_failure.process(query).to_dict() == without.process(query).to_dict()

    def test_timeout_matches_absent_service(self, dictionary, slow_augmentation):
        with_timeout = QueryPipeline(dictionary, slow_augmentation, augmentation_timeout=0.05)
        without = QueryPipeline(dictionary)
        assert with_timeout.process("silk scarf") == without.process("silk scarf")

    def test_working_service(self, dictionary):
        stub = StubAugmentation(classify_response="transactional", expand_response="shawl, wrap")
        result = QueryPipeline(dictionary, stub).process("silk scarf")
        assert result.intent == SearchIntent.TRANSACTIONAL
        assert result.expanded_terms == ("silk scarf", "shawl", "wrap")
        assert stub.classify_calls == ["silk scarf"]
        assert stub.expand_calls == ["silk scarf"]

    def test_augmentation_sees_corrected_query(self, dictionary):
        stub = StubAugmentation(classify_response="informational", expand_response="wraps")
        QueryPipeline(dictionary, stub).process("Silk SCARF")
        assert stub.classify_calls == ["silk scarf"]


class TestSerialization:

    def test_to_dict_is_json_ready(self, pipeline):
        data = pipeline.process("black leather jacket xl party under $200").to_dict()
        assert json.loads(json.dumps(data)) == data
        assert data["intent"] == "product_search"
        assert data["entities"][0] == {"type": "price", "value": {"max": 200}, "confidence": 0.9}
        assert data["corrected"] == "black leather jacket extra large party under $200"
        assert data["filters"]["sizes"] == ["large"]
        assert set(data) == {"original", "corrected", "intent", "entities", "expanded_terms", "filters"}


class TestAsync:

    def test_aprocess_matches_process(self, pipeline):
        result = asyncio.run(pipeline.aprocess("red dress under $50"))
        assert isinstance(result, ProcessedQuery)
        assert result == pipeline.process("red dress under $50")

    def test_cancellation_discards_result(self, dictionary, slow_augmentation):
        pipeline = QueryPipeline(dictionary, slow_augmentation)

        async def run():
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(pipeline.aprocess("silk scarf"), timeout=0.05)

        asyncio.run(run())

    def test_concurrent_aprocess(self, pipeline):
        async def run():
            return await asyncio.gather(*(pipeline.aprocess(q) for q in QUERIES))

        results = asyncio.run(run())
        assert results == [pipeline.process(q) for q in QUERIES]


class TestConcurrency:

    def test_threads_share_one_pipeline(self, pipeline):
        expected = [pipeline.process(q) for q in QUERIES]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(pipeline.process, QUERIES * 10))
        assert results == expected * 10


class TestFactory:

    @pytest.fixture(autouse=True)
    def clear_factory(self):
        get_query_pipeline.cache_clear()
        yield
        get_query_pipeline.cache_clear()

    def _use_config(self, monkeypatch, **kwargs):
        import xpertsearch.config
        monkeypatch.setattr(xpertsearch.config, "config", AppConfig(**kwargs))

    def test_builds_from_config(self, monkeypatch):
        self._use_config(
            monkeypatch,
            environment="development",
            augmentation=AugmentationConfig(enabled=False, openai_api_key=""),
            pipeline=PipelineConfig(fuzzy_max_distance=1, spell_min_token_length=4, expansion_min_terms=3),
        )
        pipeline = get_query_pipeline()
        assert pipeline.augmentation is None
        assert pipeline.spell_corrector.max_distance == 1
        assert pipeline.spell_corrector.min_token_length == 4
        assert pipeline.query_expander.min_terms == 3

    def test_cached(self, monkeypatch):
        self._use_config(monkeypatch, augmentation=AugmentationConfig(enabled=False, openai_api_key=""))
        assert get_query_pipeline() is get_query_pipeline()

    def test_wires_configured_augmentation(self, monkeypatch):
        self._use_config(
            monkeypatch,
            augmentation=AugmentationConfig(enabled=True, openai_api_key="sk-test", timeout=1.5),
        )
        pipeline = get_query_pipeline()
        assert pipeline.augmentation is not None
        assert pipeline.intent_classifier.timeout == 1.5
        assert pipeline.query_expander.timeout == 1.5

    def test_critical_issue_fatal_in_production(self, monkeypatch):
        self._use_config(
            monkeypatch,
            environment="production",
            debug=False,
            augmentation=AugmentationConfig(enabled=False, openai_api_key="", timeout=0),
        )
        with pytest.raises(ConfigurationError):
            get_query_pipeline()
