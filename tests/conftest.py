import pytest

from array30.core.engine import InputEngine
from array30.dictionary import Dictionary

# twelve candidates for one code: enough to spill onto a second page
MANY = ["一", "乙", "二", "十", "丁", "七", "九", "了", "人", "入", "八", "力"]


@pytest.fixture
def dictionary() -> Dictionary:
    d = Dictionary()
    d.add_char("abc", "測")
    d.add_phrase("abcd", "測試")
    d.add_char("ab", "甲")
    d.add_char("ab", "乙")
    d.add_phrase("ab", "台灣")
    d.add_char("a/", "斜")
    for ch in MANY:
        d.add_char("q", ch)
    return d


@pytest.fixture
def engine(dictionary) -> InputEngine:
    return InputEngine(dictionary)


@pytest.fixture
def type_keys():
    """Feed every char of a string to an engine, return the last result."""
    def _type(engine: InputEngine, keys: str):
        result = None
        for key in keys:
            result = engine.handle_key(key)
        return result
    return _type


@pytest.fixture
def table_dir(tmp_path):
    """A table directory laid out like the default config expects."""
    (tmp_path / "cin2").mkdir()
    (tmp_path / "cin2" / "ar30-regular-v2023-1.0-20251012.cin2").write_text(
        "%gen_inp\n"
        "%ename Array30\n"
        "%keyname begin\n"
        "a 1-\n"
        "%keyname end\n"
        "%chardef begin\n"
        "abc\t測\n"
        "a\t一\n"
        "%chardef end\n",
        encoding="utf-8",
    )
    (tmp_path / "cin2" / "ar30-big-v2023-1.0-20251012.cin2").write_text(
        "%chardef begin\nabc\t測\nabc\t𠀀\n%chardef end\n", encoding="utf-8",
    )
    (tmp_path / "array30-phrase-20210725.txt").write_text(
        "# phrases\nabcd\t測試\n,,,/\t燦爛\n", encoding="utf-8",
    )
    return tmp_path
