from pathlib import Path

from modeling_notes.constants import CHAPTERS
from modeling_notes.ui_components import callout_text, chapter_link

PAGES = Path(__file__).resolve().parents[1] / "pages"


def test_callout_uses_given_label():
    text = "A prediction at 10 °C is an extrapolation."
    assert callout_text("Extrapolation", text) == f"**Extrapolation:** {text}"
    assert "Common Mistake" not in callout_text("Extrapolation", text)


def test_callout_without_label():
    assert callout_text("", "plain") == "plain"
    assert callout_text(None, "plain") == "plain"


def test_chapter_link_label():
    assert chapter_link(3) == ("pages/03_Data_Science_Workflow.py", "Ch 3: The Data Science Workflow")


def test_chapter_link_outside_course():
    assert chapter_link(0) is None
    assert chapter_link(len(CHAPTERS) + 1) is None


def test_chapters_match_page_files():
    assert [page for page, _ in CHAPTERS] == sorted(p.name for p in PAGES.glob("[0-9]*.py"))


def test_pages_use_chapter_titles():
    for number, (page, title) in enumerate(CHAPTERS, start=1):
        source = (PAGES / page).read_text(encoding="utf-8")
        assert f'chapter_header({number}, "{title}"' in source
        assert f"navigation({number})" in source
