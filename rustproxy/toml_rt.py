from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, MutableMapping, Optional

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.container import OutOfOrderTableProxy
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import InlineTable, Table

from .fs import write_text_atomic

_LOG = logging.getLogger(__name__)


def _read_text(path: Path) -> Optional[str]:
    """Текст файла как есть (без трансляции \\r\\n); None — файла нет или он не UTF-8."""
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        _LOG.warning("Cannot decode %s (%s); starting from an empty document", path, e)
        return None


def _parse(path: Path, text: Optional[str]) -> TOMLDocument:
    if text is None:
        return tomlkit.document()
    try:
        return tomlkit.parse(text)
    except TOMLKitError as e:
        _LOG.warning("Cannot parse %s (%s); starting from an empty document", path, e)
        return tomlkit.document()


def _match_layout(text: str, original: Optional[str]) -> str:
    """
    Подгоняет вывод tomlkit под исходный файл: CRLF-файл остаётся CRLF,
    хвост из переводов строк — как в оригинале. Новые элементы tomlkit
    всегда пишет с «\\n» и добавляет пустые строки перед таблицами.
    """
    if not original:
        return text
    lf_only = original.count("\n") != original.count("\r\n")
    nl = "\n" if lf_only or "\r\n" not in original else "\r\n"
    body = text
    if nl == "\r\n":
        body = body.replace("\r\n", "\n").replace("\n", "\r\n")
    stripped = body.rstrip("\r\n")
    if not stripped.strip():
        return ""
    orig_stripped = original.rstrip("\r\n")
    tail = original[len(orig_stripped):] if orig_stripped.strip() else nl
    return stripped + tail


def load_toml_rt(path: Path) -> TOMLDocument:
    """
    Round-trip загрузка: комментарии, порядок и форматирование сохраняются.
    Отсутствующий файл — пустой документ. Нечитаемый/битый файл тоже
    превращается в пустой документ (best-effort), с предупреждением в лог.
    """
    return _parse(path, _read_text(path))


def dump_toml_rt(path: Path, doc: TOMLDocument, *, original: Optional[str] = None) -> None:
    write_text_atomic(path, _match_layout(tomlkit.dumps(doc), original))


def rewrite_toml_rt(path: Path, transform: Callable[[TOMLDocument], bool]) -> bool:
    """
    Загружает TOML с round-trip, вызывает transform(doc) → bool «изменено?»,
    и если изменено — атомарно сохраняет в раскладке исходного файла.
    """
    original = _read_text(path)
    doc = _parse(path, original)
    changed = bool(transform(doc))
    if changed:
        dump_toml_rt(path, doc, original=original)
    return changed


def ensure_table(container: MutableMapping, key: str, *, super_table: bool = False) -> MutableMapping:
    """
    Возвращает подтаблицу `key`, создавая её при отсутствии.
    super_table=True — таблица-контейнер без собственного заголовка ([source] не пишется,
    только [source.xxx]).
    Существующая таблица возвращается как есть, включая inline-таблицы и
    разнесённые по файлу секции (OutOfOrderTableProxy).
    """
    cur = container.get(key)
    if isinstance(cur, MutableMapping):
        return cur
    if cur is not None:
        # Значение не-таблица (например, `net = 1`) — заменяем, иначе ключи некуда вставить
        _LOG.debug("Replacing non-table value at '%s' with a table", key)
        del container[key]
    if isinstance(container, InlineTable):
        tbl = tomlkit.inline_table()
    elif super_table:
        tbl = tomlkit.table(is_super_table=True)
    else:
        tbl = tomlkit.table()
    container[key] = tbl
    return tbl


def _plain(val: Any) -> Any:
    if isinstance(val, MutableMapping):
        return {k: _plain(v) for k, v in val.items()}
    if hasattr(val, "unwrap"):
        return val.unwrap()
    return val


def _build_table(data: dict) -> Table:
    is_super = bool(data) and all(isinstance(v, dict) for v in data.values())
    tbl = tomlkit.table(is_super_table=is_super)
    for k, v in data.items():
        tbl[k] = _build_table(v) if isinstance(v, dict) else v
    return tbl


def consolidate_table(container: MutableMapping, key: str) -> bool:
    """
    Таблица, разнесённая по документу (заголовок + dotted-ключи, несколько
    `source.x.y = ...`), приходит из tomlkit как OutOfOrderTableProxy, и удаление
    ключей через него падает. Собираем её в одну обычную таблицу в конце документа.
    Комментарии внутри разнесённых частей при этом теряются.
    """
    cur = container.get(key)
    if not isinstance(cur, OutOfOrderTableProxy):
        return False
    data = _plain(cur)
    del container[key]
    container[key] = _build_table(data)
    _LOG.debug("Consolidated out-of-order table '%s'", key)
    return True


__all__ = ["load_toml_rt", "dump_toml_rt", "rewrite_toml_rt", "ensure_table", "consolidate_table"]
