"""Shared UI components: concept boxes, quizzes, glossary, navigation."""
import streamlit as st

from modeling_notes.constants import CHAPTERS, GLOSSARY, PART_TITLES

ACCENT = "#2A9D8F"
INK = "#264653"


def chapter_header(number, title, part=None):
    """Render a chapter header with part label."""
    if part:
        st.caption(f"Part {part}: {PART_TITLES.get(part, '')}".rstrip(": "))
    st.title(f"Chapter {number}: {title}")
    st.divider()


def concept_box(title, content, color=ACCENT):
    """Render a highlighted concept box with a colored left rule."""
    st.markdown(f"""
<div style="background-color: {color}14; padding: 18px 20px; border-radius: 8px; border-left: 5px solid {color}; margin: 10px 0;">
<h4 style="color: {color}; margin-top: 0;">{title}</h4>
<p style="color: {INK}; margin-bottom: 0;">{content}</p>
</div>
""", unsafe_allow_html=True)


def definition_box(term):
    """Render a glossary definition as a concept box."""
    concept_box(term, GLOSSARY[term], color=INK)


def formula_box(title, formula, explanation=""):
    """Render a LaTeX equation under a small heading."""
    st.markdown(f"##### {title}")
    st.latex(formula)
    if explanation:
        st.caption(explanation)


def model_formula_box(formula, meaning):
    """Render a model formula as code alongside its plain-language meaning."""
    st.code(formula, language="python")
    st.caption(meaning)


def callout_text(label, text):
    """Markdown for a labelled callout; an empty label leaves the text bare."""
    return f"**{label}:** {text}" if label else text


def insight_box(text, label="Key Insight"):
    st.info(callout_text(label, text))


def warning_box(text, label="Common Mistake"):
    st.warning(callout_text(label, text))


def library_warnings(fit):
    """Show any warnings the statistics library raised while fitting."""
    for msg in fit.warnings:
        st.warning(f"`{fit.formula}` raised a warning: {msg}")


def code_example(code, title="Show the Python", language="python"):
    """Render a collapsible code example."""
    with st.expander(title):
        st.code(code, language=language)


def glossary_lookup(key="glossary"):
    """Render a selectbox that shows the definition of a chosen term."""
    term = st.selectbox("Look up a term", sorted(GLOSSARY), key=key)
    st.markdown(f"**{term}**: {GLOSSARY[term]}")
    return term


def quiz(question, options, correct_idx, explanation="", key="quiz", title="Check Yourself"):
    """Render a multiple-choice question.

    Returns True or False once answered, None before that.
    """
    st.subheader(title)
    answer = st.radio(question, options, key=key, index=None)
    if answer is None:
        return None
    correct = options.index(answer) == correct_idx
    if correct:
        st.success("Correct!")
    else:
        st.error(f"Not quite. The answer is **{options[correct_idx]}**.")
    if explanation:
        st.caption(explanation)
    return correct


def takeaways(points):
    """Render key takeaways as a numbered list."""
    st.subheader("Key Takeaways")
    st.markdown("\n".join(f"{i}. {p}" for i, p in enumerate(points, start=1)))


def chapter_link(number):
    """Page path and link label of chapter ``number``, or None outside the course."""
    if not 1 <= number <= len(CHAPTERS):
        return None
    page, title = CHAPTERS[number - 1]
    return f"pages/{page}", f"Ch {number}: {title}"


def navigation(number):
    """Render links to the chapters on either side of chapter ``number``."""
    col1, _, col3 = st.columns([1, 2, 1])
    prev_link, next_link = chapter_link(number - 1), chapter_link(number + 1)
    if prev_link:
        col1.page_link(prev_link[0], label=f"← {prev_link[1]}")
    if next_link:
        col3.page_link(next_link[0], label=f"{next_link[1]} →")
