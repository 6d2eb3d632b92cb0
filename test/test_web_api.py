"""测试 Web API（FastAPI TestClient）"""
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from anisub.storage import MemoryStore
from anisub.web.server import create_app

from conftest import KON_DIR, KON_EP01_ID, KON_EP02_ID, SAMPLE_KEPT_TEXTS


def _url_id(episode_id: str) -> str:
    return quote(episode_id, safe="")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(subtitle_library, store) -> TestClient:
    return TestClient(create_app(subtitles_dir=subtitle_library, store=store))


def _first_subtitle(client: TestClient, episode_id: str = KON_EP01_ID) -> dict:
    resp = client.get(f"/api/episodes/{_url_id(episode_id)}")
    assert resp.status_code == 200
    return resp.json()["subtitles"][0]


def _save(client: TestClient, sub: dict, episode_id: str = KON_EP01_ID, translated: str = "Sis, time to get up...") -> dict:
    return client.post("/api/translations", json={
        "episodeId": episode_id,
        "subtitleId": sub["id"],
        "originalText": sub["text"],
        "translatedText": translated,
    })


def test_list_anime(client):
    resp = client.get("/api/anime")
    assert resp.status_code == 200
    data = resp.json()
    assert [a["title"] for a in data] == ["Lucky Star", KON_DIR]
    assert [ep["id"] for ep in data[1]["episodes"]] == [KON_EP01_ID, KON_EP02_ID]


def test_get_episode(client):
    resp = client.get(f"/api/episodes/{_url_id(KON_EP01_ID)}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["episodeId"] == KON_EP01_ID
    assert data["episodeNumber"] == 1
    assert data["animeId"] == KON_DIR
    assert [s["text"] for s in data["subtitles"]] == SAMPLE_KEPT_TEXTS
    assert data["subtitles"][0]["startTime"] == "0:00:31.29"
    assert data["translations"] == []


def test_subtitle_ids_stable_across_requests_and_files(client):
    ids1 = [s["id"] for s in client.get(f"/api/episodes/{_url_id(KON_EP01_ID)}").json()["subtitles"]]
    ids2 = [s["id"] for s in client.get(f"/api/episodes/{_url_id(KON_EP01_ID)}").json()["subtitles"]]
    # ep02 同内容但 UTF-8 编码
    ids3 = [s["id"] for s in client.get(f"/api/episodes/{_url_id(KON_EP02_ID)}").json()["subtitles"]]
    assert ids1 == ids2 == ids3


def test_get_episode_not_found(client):
    resp = client.get("/api/episodes/nope-ep01")
    assert resp.status_code == 404


def test_save_translation(client):
    sub = _first_subtitle(client)
    resp = _save(client, sub)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["translation"]["id"] == f"{KON_EP01_ID}-{sub['id']}"

    data = client.get(f"/api/episodes/{_url_id(KON_EP01_ID)}").json()
    assert [t["subtitleId"] for t in data["translations"]] == [sub["id"]]


def test_save_translation_with_encoded_episode_id(client):
    sub = _first_subtitle(client)
    resp = _save(client, sub, episode_id=_url_id(_url_id(KON_EP01_ID)))
    assert resp.status_code == 200

    data = client.get(f"/api/episodes/{_url_id(KON_EP01_ID)}").json()
    assert len(data["translations"]) == 1


def test_translations_do_not_leak_between_episodes(client):
    sub = _first_subtitle(client)
    _save(client, sub)
    data = client.get(f"/api/episodes/{_url_id(KON_EP02_ID)}").json()
    assert data["translations"] == []


def test_save_translation_missing_fields(client):
    resp = client.post("/api/translations", json={"episodeId": KON_EP01_ID, "subtitleId": "x"})
    assert resp.status_code == 400


def test_save_translation_unknown_subtitle(client):
    resp = client.post("/api/translations", json={
        "episodeId": KON_EP01_ID,
        "subtitleId": "0:00:00.00-0:00:01.00-zzz",
        "originalText": "x",
        "translatedText": "y",
    })
    assert resp.status_code == 404


def test_save_translation_unknown_episode(client):
    resp = client.post("/api/translations", json={
        "episodeId": "nope-ep01",
        "subtitleId": "s",
        "originalText": "x",
        "translatedText": "y",
    })
    assert resp.status_code == 404


def test_delete_translation(client, store):
    sub = _first_subtitle(client)
    _save(client, sub)

    resp = client.request("DELETE", "/api/translations", json={"episodeId": KON_EP01_ID, "subtitleId": sub["id"]})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert store.translation_keys("translation:*") == []


def test_delete_translation_missing_fields(client):
    resp = client.request("DELETE", "/api/translations", json={"episodeId": KON_EP01_ID})
    assert resp.status_code == 400


def test_export_srt(client):
    sub = _first_subtitle(client)
    _save(client, sub, translated="Sis, time to get up...")

    resp = client.get(f"/api/episodes/{_url_id(KON_EP01_ID)}/export.srt")
    assert resp.status_code == 200
    text = resp.text
    assert text.startswith("1\n00:00:31,290 --> 00:00:33,780\nお姉ちゃん そろそろ起きないと…\nSis, time to get up...\n")
    assert "高校生！" in text

    assert client.get("/api/episodes/nope-ep01/export.srt").status_code == 404


def test_progress_flow(client):
    resp = client.post("/api/progress/complete", json={"userId": "u1", "episodeId": KON_EP01_ID, "subtitleId": "s1"})
    assert resp.status_code == 200
    assert resp.json()["completedSubtitles"] == ["s1"]

    resp = client.put("/api/progress", json={
        "userId": "u1",
        "episodeId": KON_EP02_ID,
        "completedSubtitles": ["a", "b", "a"],
        "lastPosition": 62.5,
    })
    assert resp.status_code == 200
    assert resp.json()["completedSubtitles"] == ["a", "b"]

    progress = client.get("/api/progress/u1").json()
    assert sorted(p["episodeId"] for p in progress) == [KON_EP01_ID, KON_EP02_ID]

    stats = client.get("/api/progress/u1/stats").json()
    assert stats == {"totalEpisodes": 2, "completedSubtitles": 3, "totalTranslations": 0}


def test_progress_missing_fields(client):
    assert client.post("/api/progress/complete", json={"userId": "u1"}).status_code == 400
    assert client.put("/api/progress", json={"episodeId": KON_EP01_ID}).status_code == 400


def test_dev_endpoints(client):
    sub = _first_subtitle(client)
    _save(client, sub)

    info = client.get("/api/dev").json()
    assert info["storage"] == "memory"
    assert info["stats"]["translationsCount"] == 1

    assert client.delete("/api/dev").status_code == 200
    assert client.get("/api/dev").json()["stats"]["translationsCount"] == 0


def test_dev_endpoints_forbidden_in_production(subtitle_library):
    client = TestClient(create_app(subtitles_dir=subtitle_library, environment="production"))
    assert client.get("/api/dev").status_code == 403
    assert client.delete("/api/dev").status_code == 403
