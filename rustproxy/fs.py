from __future__ import annotations

import shutil
from pathlib import Path

from .paths import backup_path


# ---------- запись (атомарно) ----------

def write_text_atomic(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Пишет через временный соседний файл + replace.
    Симлинк разыменовывается (меняется цель, а не сама ссылка), права
    существующего файла переносятся на новый. Переводы строк не транслируются.
    """
    target = path.resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(target.suffix + ".tmp")
    with tmp.open("w", encoding=encoding, newline="") as f:
        f.write(content)
    if target.exists():
        shutil.copymode(target, tmp)
    tmp.replace(target)


# ---------- резервная копия ----------

def backup_file(path: Path) -> Path:
    """
    Побайтовая копия файла в соседний `.backup` (предыдущий бэкап перезаписывается).
    Ошибки ввода-вывода не глушим: без бэкапа правка не выполняется.
    """
    dst = backup_path(path)
    shutil.copyfile(path, dst)
    return dst


__all__ = ["write_text_atomic", "backup_file"]
