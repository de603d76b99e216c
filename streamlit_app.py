"""Streamlit Web UI for linguist.

Two editor modes:
  Composer — plain text area for writing and editing the draft
  Review   — read-only view with pending suggestions highlighted inline
The sidebar holds the report, suggestion cards, rewrite and web originality tabs.
"""

from __future__ import annotations

import asyncio
import html
import logging
import os
import time

logger = logging.getLogger(__name__)

import anthropic
import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY", "TAVILY_API_KEY"):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from linguist.clients.llm_client import LLMClient
from linguist.clients.search_client import SearchClient
from linguist.config import load_config
from linguist.editing.overlay import paragraphs
from linguist.editing.session import ReviewSession
from linguist.logging.cost_calculator import calculate_cost
from linguist.logging.models import UsageLog
from linguist.logging.usage_store import UsageStore
from linguist.models.suggestion import SuggestionType, ToneTarget
from linguist.pipeline.plagiarism_checker import PlagiarismChecker
from linguist.pipeline.rewriter import Rewriter
from linguist.pipeline.text_analyzer import TextAnalyzer

DEMO_TEXT = """Welcome to Linguist! This are a demo text to show you how the app work. It include some grammar mistaks and tone issues.

Usually, when you writes an email to a client, you want to be professional. But sometimes, you sound too casual. Linguist help you fix this.

Also, it can detects if you copied this sentence from the internet: "To be or not to be, that is the question.\""""

HIGHLIGHT_COLORS: dict[SuggestionType, str] = {
    SuggestionType.GRAMMAR: "#f87171",
    SuggestionType.CLARITY: "#60a5fa",
    SuggestionType.TONE: "#c084fc",
    SuggestionType.ENGAGEMENT: "#4ade80",
    SuggestionType.STRATEGIC: "#fbbf24",
    SuggestionType.FORMATTING: "#2dd4bf",
}

AUTH_ERRORS = (anthropic.AuthenticationError, anthropic.PermissionDeniedError)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Linguist",
    page_icon=":pencil2:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_config():
    return load_config()


def _get_session() -> ReviewSession:
    if "session" not in st.session_state:
        st.session_state["session"] = ReviewSession(DEMO_TEXT)
    return st.session_state["session"]


def _get_store() -> UsageStore:
    return UsageStore(db_path=_get_config().usage.resolved_db_path)


def _record(mode: str, started: float, llm=None, search=None, **fields) -> None:
    calls = llm.get_token_summary()["calls"] if llm else []
    searches = search.get_search_count() if search else 0
    try:
        _get_store().save_log(
            UsageLog(
                mode=mode,
                total_input_tokens=sum(c[1] for c in calls),
                total_output_tokens=sum(c[2] for c in calls),
                search_count=searches,
                elapsed_seconds=time.time() - started,
                estimated_cost_usd=calculate_cost(calls, searches),
                **fields,
            )
        )
    except Exception:
        logger.exception("Failed to record usage")


def _report_llm_error(e: Exception) -> None:
    if isinstance(e, AUTH_ERRORS):
        st.error("AI authentication failed. Set a valid ANTHROPIC_API_KEY and reload the page.")
    else:
        st.error(f"Analysis failed: {e}")


def _render_overlay_html(session: ReviewSession) -> str:
    """Build the review-mode HTML: one <p> per paragraph, suggestions as spans."""
    blocks = []
    for para in paragraphs(session.overlay()):
        parts = []
        for seg in para:
            text = html.escape(seg.text)
            if seg.is_highlight:
                color = HIGHLIGHT_COLORS.get(seg.category, "#a5b4fc")
                parts.append(
                    f'<span title="{html.escape(seg.explanation or "")}" '
                    f'style="border-bottom: 2px solid {color}; background: {color}22; '
                    f'cursor: help;">{text}</span>'
                )
            else:
                parts.append(text)
        body = "".join(parts) or "&nbsp;"
        blocks.append(f'<p style="line-height: 2.2; margin-bottom: 1rem;">{body}</p>')
    return "\n".join(blocks)


def _sync_editor() -> None:
    _get_session().edit(st.session_state["editor_text"])


def _clear() -> None:
    _get_session().replace("")
    st.session_state["editor_text"] = ""


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def _analyze(tone: ToneTarget) -> None:
    session = _get_session()
    if not session.document.strip():
        return
    config = _get_config()
    llm = LLMClient(timeout=config.llm.timeout, model=config.llm.model)
    started = time.time()
    with st.spinner("Deep engine scan..."):
        try:
            analysis = asyncio.run(TextAnalyzer(llm).analyze(session.document, tone))
        except Exception as e:
            logger.exception("Analysis failed")
            _record("analyze", started, llm, tone=tone.value, success=False, error_message=str(e))
            _report_llm_error(e)
            return
    session.load_analysis(analysis)
    _record(
        "analyze",
        started,
        llm,
        model=config.llm.model,
        tone=tone.value,
        suggestion_count=len(analysis.suggestions),
    )


def _accept(suggestion_id: str) -> None:
    result = _get_session().accept(suggestion_id)
    if not result.applied:
        st.toast("This suggestion could not be located in the current text.")
    st.session_state["editor_text"] = _get_session().document


def _dismiss(suggestion_id: str) -> None:
    _get_session().dismiss(suggestion_id)


def _accept_all() -> None:
    result = _get_session().accept_all()
    if result.skipped_ids:
        st.toast(f"{len(result.skipped_ids)} suggestions could not be located.")
    st.session_state["editor_text"] = _get_session().document


def _rewrite(instruction: str) -> None:
    session = _get_session()
    config = _get_config()
    llm = LLMClient(timeout=config.llm.timeout, model=config.llm.rewrite_model)
    started = time.time()
    with st.spinner("Rewriting..."):
        try:
            rewritten = asyncio.run(Rewriter(llm).rewrite(session.document, instruction))
        except Exception as e:
            logger.exception("Rewrite failed")
            _record("rewrite", started, llm, success=False, error_message=str(e))
            _report_llm_error(e)
            return
    session.replace(rewritten)
    st.session_state["editor_text"] = rewritten
    _record("rewrite", started, llm, model=config.llm.rewrite_model)


def _check_originality() -> None:
    config = _get_config()
    try:
        search = SearchClient()
    except ValueError as e:
        st.error(str(e))
        return
    checker = PlagiarismChecker(
        search,
        max_chars=config.search.max_chars,
        max_queries=config.search.max_queries,
        max_results=config.search.max_results,
        search_depth=config.search.search_depth,
    )
    started = time.time()
    with st.spinner("Searching the web..."):
        st.session_state["plagiarism"] = asyncio.run(checker.check(_get_session().document))
    _record("plagiarism", started, search=search)


# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------


def _editor() -> None:
    session = _get_session()
    mode = st.radio("Mode", ["Composer", "Review"], horizontal=True, label_visibility="collapsed")

    if mode == "Composer":
        if "editor_text" not in st.session_state:
            st.session_state["editor_text"] = session.document
        st.text_area(
            "Draft",
            key="editor_text",
            height=480,
            on_change=_sync_editor,
            label_visibility="collapsed",
            placeholder="Type your draft here...",
        )
    else:
        if session.pending:
            st.markdown(_render_overlay_html(session), unsafe_allow_html=True)
        else:
            for para in session.document.split("\n"):
                st.markdown(html.escape(para) or "&nbsp;", unsafe_allow_html=True)

    col1, col2, col3 = st.columns([1, 1, 2])
    col1.caption(f"{session.word_count} words")
    col2.caption(f"{session.char_count} characters")
    col3.button("Clear", key="btn_clear", on_click=_clear)


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------


def _suggestions_tab() -> None:
    session = _get_session()
    tone = st.selectbox(
        "Target tone",
        list(ToneTarget),
        index=list(ToneTarget).index(_get_config().editor.tone),
        format_func=lambda t: t.value,
    )
    if st.button("Analyze", type="primary", disabled=not session.document.strip()):
        _analyze(tone)
        st.rerun()

    analysis = session.analysis
    if analysis is None:
        st.caption("Run an analysis to see suggestions.")
        return

    c1, c2 = st.columns(2)
    c1.metric("Overall", analysis.overall_score)
    c2.metric("Readability", analysis.readability_score, help=analysis.readability_level)
    st.caption(f"Tone detected: {analysis.tone_detected}")
    if analysis.summary:
        st.info(analysis.summary)

    review = analysis.learning_review
    if review.grammar_focus_areas or review.general_feedback:
        with st.expander("Learning review"):
            for area in review.grammar_focus_areas:
                st.markdown(f"- {area}")
            if review.vocabulary_tips:
                st.markdown(f"**Vocabulary**: {review.vocabulary_tips}")
            if review.general_feedback:
                st.write(review.general_feedback)
            for res in review.recommended_resources:
                st.markdown(f"- {res}")

    pending = session.pending
    if not pending:
        st.success("All suggestions handled.")
        return

    if st.button(f"Accept all ({len(pending)})", key="btn_accept_all"):
        _accept_all()
        st.rerun()

    for s in pending:
        with st.container(border=True):
            st.markdown(f"**{s.category.value}**")
            st.markdown(f"~~{s.original_text}~~")
            st.markdown(f"**{s.suggested_text}**")
            st.caption(s.explanation)
            a, d = st.columns(2)
            if a.button("Apply", key=f"apply_{s.id}"):
                _accept(s.id)
                st.rerun()
            if d.button("Dismiss", key=f"dismiss_{s.id}"):
                _dismiss(s.id)
                st.rerun()


def _rewrite_tab() -> None:
    instruction = st.text_area(
        "Rewrite instruction",
        placeholder="e.g. Make it shorter and more confident",
        height=100,
        max_chars=500,
    )
    if st.button("Rewrite", type="primary", disabled=not instruction.strip()):
        _rewrite(instruction)
        st.rerun()


def _originality_tab() -> None:
    if st.button("Check the web", type="primary", disabled=not _get_session().document.strip()):
        _check_originality()

    result = st.session_state.get("plagiarism")
    if result is None:
        return
    st.metric("Originality", f"{result.originality_score}%", help=result.status)
    for m in result.matches:
        with st.container(border=True):
            st.markdown(f"**[{m.source_title}]({m.source_url})** ({m.similarity})")
            st.caption(m.segment)


with st.sidebar:
    st.title("Linguist")
    st.caption("AI writing assistant")
    tab_report, tab_rewrite, tab_web = st.tabs(["Report", "Gen AI", "Web"])
    with tab_report:
        _suggestions_tab()
    with tab_rewrite:
        _rewrite_tab()
    with tab_web:
        _originality_tab()
    st.divider()
    try:
        st.caption(f"Prompts used: {_get_store().prompt_count()}")
    except Exception:
        logger.exception("Usage store unavailable")

_editor()
