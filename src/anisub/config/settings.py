import os
from pathlib import Path
from dataclasses import dataclass

from dotenv import load_dotenv

# 全局变量：存储 .env 文件所在目录（用于解析相对路径）
_env_file_dir: Path | None = None

STORE_BACKENDS = ("memory", "json")


def load_env_file(env_path: str | Path | None = None) -> None:
    """
    加载项目级 .env 文件（不覆盖已存在的环境变量）。

    如果 env_path 为 None，从当前工作目录和本文件所在目录向上查找 .env。

    Args:
        env_path: .env 文件路径（None = 自动查找）
    """
    global _env_file_dir

    if env_path is None:
        candidates = [Path.cwd(), *Path.cwd().parents, *Path(__file__).resolve().parents]
        for parent in candidates:
            env_file = parent / ".env"
            if env_file.is_file():
                load_dotenv(env_file, override=False)
                _env_file_dir = env_file.parent
                return
    else:
        env_path = Path(env_path)
        if env_path.exists():
            load_dotenv(env_path, override=False)
            _env_file_dir = env_path.parent


def resolve_relative_path(path: str | Path) -> Path:
    """
    解析相对路径：如果是相对路径，则相对于 .env 文件所在目录。
    如果是绝对路径，直接返回。

    Args:
        path: 路径字符串或 Path 对象

    Returns:
        解析后的绝对路径
    """
    path = Path(path)

    if path.is_absolute():
        return path

    if _env_file_dir:
        return (_env_file_dir / path).resolve()

    # 没有加载过 .env，相对于当前工作目录
    return path.resolve()


def get_environment() -> str:
    """
    运行环境：development / production。
    环境变量：ANISUB_ENV（默认 development）
    """
    return os.getenv("ANISUB_ENV", "development").strip().lower() or "development"


def get_subtitles_dir() -> Path:
    """
    字幕根目录（<dir>/<anime>/<episode>.JP.ass）。
    环境变量：ANISUB_SUBTITLES_DIR（默认 ./subtitles）
    """
    return resolve_relative_path(os.getenv("ANISUB_SUBTITLES_DIR", "./subtitles"))


@dataclass
class AppConfig:
    # ── 字幕库 ──
    subtitles_dir: Path | None = None  # None = 从环境变量读取

    # ── 存储 ──
    store: str | None = None  # memory / json（None = ANISUB_STORE，默认 memory）
    store_path: Path | None = None  # json 存储文件路径（None = ANISUB_STORE_PATH）

    # ── 运行环境 ──
    environment: str | None = None  # development / production（None = ANISUB_ENV）

    def __post_init__(self):
        if self.subtitles_dir is None:
            self.subtitles_dir = get_subtitles_dir()
        else:
            self.subtitles_dir = resolve_relative_path(self.subtitles_dir)

        if self.store is None:
            self.store = os.getenv("ANISUB_STORE", "memory").strip().lower() or "memory"
        if self.store not in STORE_BACKENDS:
            raise ValueError(f"Unknown store backend: {self.store!r} (expected one of {STORE_BACKENDS})")

        if self.store_path is None:
            self.store_path = resolve_relative_path(
                os.getenv("ANISUB_STORE_PATH", "./data/translations.json")
            )

        if self.environment is None:
            self.environment = get_environment()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
