from pathlib import Path


# 项目根目录
BASE_DIR = Path(__file__).resolve().parents[1]

# 常用子目录路径
CONFIG_DIR = BASE_DIR / 'config'
LOG_DIR = BASE_DIR / 'log'


def resolve_path(path: str) -> Path:
    """相对路径按项目根目录解析"""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return BASE_DIR / candidate
