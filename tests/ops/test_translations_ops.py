"""Tests for book_catalog.ops.translations — the per-language translation cache."""

import asyncio

import pytest

from book_catalog.core.errors import ErrorCode, TranslationError
from book_catalog.ops.translations import get_translated_book, translate_attributes

DUNE = {
    "id": 7,
    "title": "Dune",
    "overview": "Desert planet",
    "year": 1965,
    "user_id": "u1",
}


@pytest.mark.asyncio
async def test_translate_attributes_skips_non_strings(translator):
    book = {**DUNE, "translations": {"de": {"title": "Der Wüstenplanet"}}}
    translated = await translate_attributes(translator, book, "fr")
    assert translated == {
        "title": "[fr] Dune",
        "overview": "[fr] Desert planet",
        "user_id": "[fr] u1",
    }


class StallingTranslator:
    """Fails on one text and blocks on every other until cancelled."""

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on
        self.cancelled: list[str] = []

    async def translate(self, text: str, target_language: str) -> str:
        if self.fail_on in text:
            raise TranslationError("Error translating text")
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.cancelled.append(text)
            raise
        return text


@pytest.mark.asyncio
async def test_translate_attributes_cancels_pending_calls():
    translator = StallingTranslator(fail_on="Desert")
    with pytest.raises(ExceptionGroup) as excinfo:
        await translate_attributes(translator, DUNE, "fr")

    assert excinfo.group_contains(TranslationError)
    assert sorted(translator.cancelled) == ["Dune", "u1"]


@pytest.mark.asyncio
async def test_translate_attributes_reports_every_failure(translator):
    translator.fail_on = "u"
    with pytest.raises(ExceptionGroup) as excinfo:
        await translate_attributes(translator, {"title": "Dune", "user_id": "u1"}, "fr")

    assert len(excinfo.value.exceptions) == 2
    assert all(isinstance(e, TranslationError) for e in excinfo.value.exceptions)


class TestGetTranslatedBook:
    @pytest.mark.asyncio
    async def test_miss_computes_and_persists(self, ctx, books_store, translator):
        await books_store.put(DUNE)
        result = await get_translated_book(ctx, "7", "fr")

        assert result.success
        assert result.metadata == {"cache": "miss"}
        assert result.data["translations"]["fr"]["title"] == "[fr] Dune"
        assert result.data["title"] == "Dune"
        stored = await books_store.get({"id": 7})
        assert stored["translations"] == result.data["translations"]
        assert len(translator.calls) == 3

    @pytest.mark.asyncio
    async def test_second_call_hits_cache(self, ctx, books_store, translator):
        await books_store.put(DUNE)
        first = await get_translated_book(ctx, "7", "fr")
        second = await get_translated_book(ctx, "7", "fr")

        assert second.metadata == {"cache": "hit"}
        assert second.data == first.data
        assert len(translator.calls) == 3
        assert books_store.calls["update_partial"] == 1

    @pytest.mark.asyncio
    async def test_existing_languages_kept(self, ctx, books_store):
        await books_store.put({**DUNE, "translations": {"de": {"title": "Der Wüstenplanet"}}})
        result = await get_translated_book(ctx, "7", "fr")
        assert set(result.data["translations"]) == {"de", "fr"}
        assert result.data["translations"]["de"] == {"title": "Der Wüstenplanet"}

    @pytest.mark.asyncio
    async def test_cached_entry_not_refreshed(self, ctx, books_store, translator):
        await books_store.put(DUNE)
        await get_translated_book(ctx, "7", "fr")
        await books_store.update_partial({"id": 7}, {"title": "Dune Messiah"})

        result = await get_translated_book(ctx, "7", "fr")
        assert result.data["translations"]["fr"]["title"] == "[fr] Dune"

    @pytest.mark.asyncio
    async def test_upstream_failure_persists_nothing(self, ctx, books_store, translator):
        await books_store.put(DUNE)
        translator.fail_on = "Desert"

        result = await get_translated_book(ctx, "7", "fr")
        assert result.code == ErrorCode.UPSTREAM_TRANSLATION_ERROR
        assert result.error.message == "Error translating text"
        assert "translations" not in await books_store.get({"id": 7})
        assert books_store.calls["update_partial"] == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("book_id, language", [("7", None), ("7", ""), (None, "fr"), ("x", "fr")])
    async def test_missing_parameter(self, ctx, books_store, book_id, language):
        result = await get_translated_book(ctx, book_id, language)
        assert result.code == ErrorCode.MISSING_PARAMETER
        assert books_store.total_calls == 0

    @pytest.mark.asyncio
    async def test_not_found(self, ctx, translator):
        result = await get_translated_book(ctx, "7", "fr")
        assert result.code == ErrorCode.NOT_FOUND
        assert translator.calls == []

    @pytest.mark.asyncio
    async def test_store_failure(self, services, failing_store):
        services.books = failing_store
        result = await get_translated_book(services.context(), "7", "fr")
        assert result.code == ErrorCode.STORE_ERROR

    @pytest.mark.asyncio
    async def test_persist_failure(self, services, write_failing_store, translator):
        await write_failing_store.put(DUNE)
        write_failing_store.fail_writes = True

        result = await get_translated_book(services.context(), "7", "fr")
        assert result.code == ErrorCode.STORE_ERROR
        assert result.error.message.startswith("Failed to store translation")
        assert "translations" not in await write_failing_store.get({"id": 7})
        assert len(translator.calls) == 3
