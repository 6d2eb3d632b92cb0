"""
CLI entry point for anisub

  anisub serve --subtitles-dir ./subtitles --port 8765
  anisub parse "[K-ON!][01].JP.ass" --json
  anisub scan ./subtitles
  anisub key "[CASO&I.G][K-ON!]-ep01" "0:00:31.29-0:00:33.78-1x2k3b"
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from anisub.config.settings import AppConfig, load_env_file
from anisub.library.scanner import read_subtitle_file, scan_subtitles
from anisub.storage import build_store
from anisub.storage.keys import create_translation_key, normalize_episode_id
from anisub.subtitle.ass_parser import parse_ass
from anisub.utils.logger import error, info, set_level, success


def serve(args, config: AppConfig) -> None:
    """启动 Web 服务。"""
    import uvicorn

    from anisub.web.server import create_app

    store = build_store(config)
    app = create_app(
        subtitles_dir=config.subtitles_dir,
        store=store,
        environment=config.environment,
        static_dir=args.static_dir,
    )
    success(f"Serving {config.subtitles_dir} on http://{args.host}:{args.port} (store={store.backend})")
    uvicorn.run(app, host=args.host, port=args.port)


def parse_one(path: Path, as_json: bool) -> bool:
    """解析单个字幕文件并输出。"""
    try:
        content = read_subtitle_file(path)
    except FileNotFoundError:
        error(f"File not found: {path}")
        return False

    parsed = parse_ass(content)

    if as_json:
        json.dump(parsed.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return True

    title = parsed.info.get("Title", path.name)
    info(f"{title}: {len(parsed.dialogues)} dialogue(s), {len(parsed.styles)} style(s)")
    for d in parsed.dialogues:
        print(f"{d.start_time} → {d.end_time}  [{d.style}] {d.text}  ({d.id})")
    return True


def scan(subtitles_dir: Path) -> None:
    """列出字幕库中的动画和剧集。"""
    anime_list = scan_subtitles(subtitles_dir)
    if not anime_list:
        info(f"No subtitles found in {subtitles_dir}")
        return
    for anime in anime_list:
        info(f"{anime.title} ({anime.id}): {len(anime.episodes)} episode(s)")
        for ep in anime.episodes:
            info(f"  #{ep.number:>3}  {ep.id}")


# ── 主入口 ──────────────────────────────────────────────────

def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Anime subtitle study: ASS parsing, lyric filtering, translation store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  anisub serve --subtitles-dir ./subtitles            # Web API
  anisub parse episode.JP.ass                         # Dialogue lines with ids
  anisub parse episode.JP.ass --json                  # ParsedDocument as JSON
  anisub scan ./subtitles                             # Anime / episode ids
  anisub key "[CASO&I.G][K-ON!]-ep01" <subtitle-id>   # Storage key
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8765, help="Bind port (default: 8765)")
    serve_parser.add_argument(
        "--subtitles-dir", type=str,
        help="Subtitle library root (default: $ANISUB_SUBTITLES_DIR or ./subtitles)",
    )
    serve_parser.add_argument(
        "--store", type=str, choices=["memory", "json"],
        help="Translation store backend (default: $ANISUB_STORE or memory)",
    )
    serve_parser.add_argument("--static-dir", type=str, help="Frontend build directory to mount at /")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse an ASS file")
    parse_parser.add_argument("files", nargs="+", type=str, help="ASS subtitle file(s)")
    parse_parser.add_argument("--json", action="store_true", help="Print ParsedDocument as JSON")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="List anime and episodes in the subtitle library")
    scan_parser.add_argument("dir", nargs="?", type=str, help="Subtitle library root")

    # key command
    key_parser = subparsers.add_parser("key", help="Show the normalized storage key for an episode id")
    key_parser.add_argument("episode_id", type=str)
    key_parser.add_argument("subtitle_id", nargs="?", type=str)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    load_env_file()
    if args.verbose:
        set_level(logging.DEBUG)

    if args.command == "serve":
        try:
            config = AppConfig(subtitles_dir=args.subtitles_dir, store=args.store)
        except ValueError as e:
            error(str(e))
            sys.exit(1)
        serve(args, config)

    elif args.command == "parse":
        failed = [f for f in args.files if not parse_one(Path(f), args.json)]
        if failed:
            error(f"Failed: {', '.join(failed)}")
            sys.exit(1)

    elif args.command == "scan":
        subtitles_dir = Path(args.dir) if args.dir else AppConfig().subtitles_dir
        scan(subtitles_dir)

    elif args.command == "key":
        print(normalize_episode_id(args.episode_id))
        if args.subtitle_id:
            print(create_translation_key(args.episode_id, args.subtitle_id))


if __name__ == "__main__":
    main()
