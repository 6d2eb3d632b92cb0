"""测试翻译存储：MemoryStore / JsonFileStore / TranslationService"""
import json
from urllib.parse import quote

import pytest

from anisub.config.settings import AppConfig
from anisub.schema.anime import Translation, UserProgress
from anisub.storage import JsonFileStore, MemoryStore, TranslationService, build_store
from anisub.storage.keys import create_translation_key

EPISODE_ID = "[CASO&I.G][K-ON!!]-ep01-1920x1080"


def _make_translation(subtitle_id: str = "0:00:31.29-0:00:33.78-abc123", episode_id: str = EPISODE_ID, **kwargs) -> Translation:
    data = dict(
        id=f"{episode_id}-{subtitle_id}",
        episode_id=episode_id,
        subtitle_id=subtitle_id,
        original_text="お姉ちゃん そろそろ起きないと…",
        translated_text="Big sister, you should get up soon...",
        timestamp=1700000000000,
    )
    data.update(kwargs)
    return Translation(**data)


@pytest.fixture(params=["memory", "json"])
def service(request, tmp_path) -> TranslationService:
    if request.param == "memory":
        return TranslationService(MemoryStore())
    return TranslationService(JsonFileStore(tmp_path / "store.json"))


def test_save_and_get(service):
    t = _make_translation()
    service.save_translation(t)
    assert service.get_translation(t.episode_id, t.subtitle_id) == t


def test_get_missing_returns_none(service):
    assert service.get_translation(EPISODE_ID, "nope") is None


def test_special_characters_in_episode_id(service):
    t = _make_translation(subtitle_id="subtitle-1")
    service.save_translation(t)
    assert service.get_episode_translations(EPISODE_ID) == [t]


def test_multiple_translations_for_episode(service):
    ts = [_make_translation(subtitle_id=f"subtitle-{i}", translated_text=f"Test {i}") for i in (1, 2)]
    for t in ts:
        service.save_translation(t)
    got = service.get_episode_translations(EPISODE_ID)
    assert sorted(got, key=lambda t: t.subtitle_id) == ts


def test_encoded_episode_ids_share_translations(service):
    service.save_translation(_make_translation(episode_id=quote(EPISODE_ID, safe="")))
    assert len(service.get_episode_translations(EPISODE_ID)) == 1
    assert len(service.get_episode_translations(quote(quote(EPISODE_ID, safe=""), safe=""))) == 1


def test_translations_do_not_cross_episodes(service):
    service.save_translation(_make_translation(episode_id="show-ep01"))
    service.save_translation(_make_translation(episode_id="show-ep010"))
    assert [t.episode_id for t in service.get_episode_translations("show-ep01")] == ["show-ep01"]


def test_last_write_wins(service):
    service.save_translation(_make_translation(translated_text="first"))
    service.save_translation(_make_translation(translated_text="second"))
    got = service.get_episode_translations(EPISODE_ID)
    assert [t.translated_text for t in got] == ["second"]


def test_delete_translation(service):
    t = _make_translation()
    service.save_translation(t)
    service.delete_translation(quote(EPISODE_ID, safe=""), t.subtitle_id)
    assert service.get_translation(EPISODE_ID, t.subtitle_id) is None
    # 删除不存在的键不报错
    service.delete_translation(EPISODE_ID, t.subtitle_id)


def test_mark_subtitle_completed_is_idempotent(service):
    first = service.mark_subtitle_completed("u1", EPISODE_ID, "s1")
    assert first.completed_subtitles == ["s1"]
    updated_at = first.updated_at

    again = service.mark_subtitle_completed("u1", EPISODE_ID, "s1")
    assert again.completed_subtitles == ["s1"]
    assert again.updated_at == updated_at

    encoded = service.mark_subtitle_completed("u1", quote(EPISODE_ID, safe=""), "s2")
    assert encoded.completed_subtitles == ["s1", "s2"]
    assert service.get_user_progress("u1", EPISODE_ID).completed_subtitles == ["s1", "s2"]


def test_progress_and_translations_are_separate_namespaces(service):
    service.save_user_progress(UserProgress(user_id="u1", episode_id=EPISODE_ID, completed_subtitles=["s1"]))
    service.save_translation(_make_translation())
    assert len(service.get_all_user_progress("u1")) == 1
    assert len(service.get_episode_translations(EPISODE_ID)) == 1
    assert service.get_all_user_progress("u2") == []


def test_study_stats(service):
    service.mark_subtitle_completed("u1", "ep01", "s1")
    service.mark_subtitle_completed("u1", "ep01", "s2")
    service.mark_subtitle_completed("u1", "ep02", "s1")
    service.mark_subtitle_completed("u2", "ep01", "s9")
    service.save_translation(_make_translation(episode_id="ep01", subtitle_id="s1"))
    service.save_translation(_make_translation(episode_id="ep02", subtitle_id="s1"))

    assert service.get_study_stats("u1") == {
        "totalEpisodes": 2,
        "completedSubtitles": 3,
        "totalTranslations": 2,
    }


def test_clear_and_stats(service):
    service.save_translation(_make_translation())
    service.mark_subtitle_completed("u1", EPISODE_ID, "s1")
    stats = service.store.stats()
    assert stats["translationsCount"] == 1
    assert stats["progressCount"] == 1
    assert stats["translations"][0]["episodeId"] == EPISODE_ID

    service.store.clear()
    assert service.store.stats()["translationsCount"] == 0
    assert service.get_all_user_progress("u1") == []


def test_memory_stores_are_isolated():
    a, b = MemoryStore(), MemoryStore()
    a.set_translation(create_translation_key(EPISODE_ID, "s1"), _make_translation(subtitle_id="s1"))
    assert b.translation_keys("translation:*") == []


def test_json_store_persists(tmp_path):
    path = tmp_path / "data" / "store.json"
    service = TranslationService(JsonFileStore(path))
    t = _make_translation()
    service.save_translation(t)
    service.mark_subtitle_completed("u1", EPISODE_ID, t.subtitle_id)

    reopened = TranslationService(JsonFileStore(path))
    assert reopened.get_translation(EPISODE_ID, t.subtitle_id) == t
    assert reopened.get_user_progress("u1", EPISODE_ID).completed_subtitles == [t.subtitle_id]

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    assert set(data) == {"translations", "progress"}
    assert not path.with_suffix(".json.tmp").exists()


def test_build_store(tmp_path):
    assert isinstance(build_store(AppConfig(store="memory", subtitles_dir=tmp_path)), MemoryStore)
    store = build_store(AppConfig(store="json", store_path=tmp_path / "s.json", subtitles_dir=tmp_path))
    assert isinstance(store, JsonFileStore)
    assert store.path == tmp_path / "s.json"
