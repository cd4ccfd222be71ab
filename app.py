"""
The Insight Times - AI Newsroom
Type a topic, get a grounded front-page story with an illustration.

Run with: streamlit run app.py
"""

import streamlit as st
import sys
from pathlib import Path
import html

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

# Load environment variables
from dotenv import load_dotenv
load_dotenv()

# Centralized configuration
from newsdesk.config import config
from newsdesk.article_state import AppState, SessionSnapshot
from newsdesk.agents import (
    DotenvKeySelector,
    EnvironmentCredentialGate,
    GeminiReporterAgent,
    NanoBananaClient,
)
from newsdesk.newsroom import NewsroomSession
from newsdesk.utils import configure_logging, get_logger, masthead_date, run_sync, utc_now

logger = get_logger("app")

# Page config
st.set_page_config(
    page_title=config.newsroom.PUBLICATION_NAME,
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Newspaper CSS
st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=UnifrakturMaguntia&family=Playfair+Display:wght@400;700;900&family=Lora:ital,wght@0,400;0,600;1,400&family=Inter:wght@400;600;700&display=swap');

    :root {
        --ink: #111111;
        --ink-soft: #4b5563;
        --ink-faint: #9ca3af;
        --rule: #d1d5db;
        --paper: #fdfdfd;
    }

    .stApp {
        background: var(--paper);
        border-top: 4px solid var(--ink);
    }

    /* Masthead */
    .top-bar {
        display: flex;
        justify-content: space-between;
        font-family: 'Inter', sans-serif;
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 0.08em;
        color: var(--ink-soft);
        padding: 0.5rem 1rem;
        border-bottom: 1px solid var(--rule);
    }
    .masthead {
        font-family: 'UnifrakturMaguntia', serif;
        font-size: 5rem;
        text-align: center;
        color: var(--ink);
        line-height: 1;
        padding: 2rem 0 1.5rem 0;
    }
    .tagline {
        font-family: 'Playfair Display', serif;
        font-style: italic;
        text-align: center;
        color: var(--ink-soft);
        padding: 0.5rem 0;
        border-top: 1px solid var(--rule);
        border-bottom: 3px double var(--rule);
        margin-bottom: 2rem;
    }

    /* Landing */
    .landing-title {
        font-family: 'Playfair Display', serif;
        font-size: 2.75rem;
        font-weight: 700;
        text-align: center;
        color: var(--ink);
    }
    .landing-copy {
        font-family: 'Lora', serif;
        font-size: 1.125rem;
        text-align: center;
        color: var(--ink-soft);
        margin-bottom: 2rem;
    }
    .error-box {
        margin-top: 2rem;
        padding: 1rem;
        border: 1px solid #fecaca;
        background: #fef2f2;
        color: #991b1b;
        font-family: 'Inter', sans-serif;
        font-size: 0.875rem;
    }
    .faux-columns {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 2rem;
        border-top: 1px solid var(--rule);
        padding-top: 2rem;
        margin-top: 3rem;
        opacity: 0.3;
        pointer-events: none;
        user-select: none;
    }
    .faux-line { background: #e5e7eb; height: 0.75rem; margin-bottom: 0.5rem; }
    .faux-block { background: #e5e7eb; height: 8rem; margin-bottom: 0.5rem; }

    /* Loading */
    .loading {
        text-align: center;
        padding: 6rem 0;
    }
    .loading h2 {
        font-family: 'Playfair Display', serif;
        font-weight: 700;
        color: var(--ink);
    }
    .loading p {
        font-family: 'Inter', sans-serif;
        text-transform: uppercase;
        letter-spacing: 0.15em;
        font-size: 0.875rem;
        color: var(--ink-soft);
    }

    /* Article */
    .headline {
        font-family: 'Playfair Display', serif;
        font-size: 3.25rem;
        font-weight: 900;
        line-height: 1.1;
        text-align: center;
        color: var(--ink);
    }
    .subheadline {
        font-family: 'Lora', serif;
        font-style: italic;
        font-size: 1.375rem;
        text-align: center;
        color: var(--ink-soft);
        margin: 1rem 0 1.5rem 0;
    }
    .byline {
        font-family: 'Inter', sans-serif;
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        text-align: center;
        color: var(--ink-soft);
        border-top: 1px solid var(--rule);
        border-bottom: 1px solid var(--rule);
        padding: 0.5rem 0;
        margin-bottom: 1.5rem;
    }
    .lead-image { width: 100%; margin-bottom: 0.25rem; }
    .image-caption {
        font-family: 'Inter', sans-serif;
        font-size: 0.75rem;
        color: var(--ink-faint);
        text-align: right;
        margin-bottom: 2rem;
    }
    .body-text {
        font-family: 'Lora', serif;
        font-size: 1.125rem;
        line-height: 1.8;
        color: var(--ink);
        column-count: 2;
        column-gap: 2.5rem;
    }
    .body-text p:first-child::first-letter {
        font-family: 'Playfair Display', serif;
        float: left;
        font-size: 4rem;
        line-height: 0.8;
        padding-right: 0.5rem;
    }
    .sources {
        border-top: 2px solid var(--ink);
        margin-top: 2rem;
        padding-top: 1rem;
        font-family: 'Inter', sans-serif;
        font-size: 0.8125rem;
    }
    .sources h4 {
        text-transform: uppercase;
        letter-spacing: 0.1em;
        font-size: 0.75rem;
    }

    /* Footer */
    .footer {
        border-top: 1px solid var(--rule);
        margin-top: 5rem;
        padding: 2rem 0;
        text-align: center;
        font-family: 'Inter', sans-serif;
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 0.08em;
        color: var(--ink-faint);
    }
</style>
""", unsafe_allow_html=True)


def safe_html(text: str) -> str:
    """Escape HTML entities in dynamic text before injection into unsafe_allow_html."""
    return html.escape(str(text)) if text else ""


@st.cache_resource
def init_logging() -> bool:
    """Configure structlog and check configuration once per server process."""
    configure_logging(log_dir=config.LOG_DIR, level=config.LOG_LEVEL)
    status = config.validate()
    logger.info("app_started", app=config.APP_NAME, version=config.VERSION,
                environment=status["environment"])
    for issue in status["issues"]:
        logger.error("config_issue", issue=issue)
    for warning in status["warnings"]:
        logger.warning("config_warning", warning=warning)
    return status["valid"]


def get_session() -> NewsroomSession:
    """One NewsroomSession per browser session."""
    if "newsroom" not in st.session_state:
        selector = DotenvKeySelector()
        st.session_state.key_selector = selector
        st.session_state.newsroom = NewsroomSession(
            gate=EnvironmentCredentialGate(selector),
            reporter=GeminiReporterAgent(),
            illustrator=NanoBananaClient(),
        )
    return st.session_state.newsroom


# ---------------------------------------------------------------------------
# Static chrome
# ---------------------------------------------------------------------------

def render_header():
    newsroom = config.newsroom
    st.markdown(f'''
    <div class="top-bar">
        <span>{safe_html(newsroom.EDITION)}</span>
        <span>{safe_html(masthead_date())}</span>
    </div>
    <div class="masthead">{safe_html(newsroom.PUBLICATION_NAME)}</div>
    <div class="tagline">"{safe_html(newsroom.TAGLINE)}"</div>
    ''', unsafe_allow_html=True)


def render_footer():
    st.markdown(
        f'<div class="footer">&copy; {utc_now().year} {safe_html(config.newsroom.PUBLICATION_NAME)}. '
        f'AI-Generated Content. Verify independently.</div>',
        unsafe_allow_html=True
    )


# ---------------------------------------------------------------------------
# State views
# ---------------------------------------------------------------------------

def render_credential_screen(session: NewsroomSession):
    """AWAITING_CREDENTIAL: collect a key and re-check."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown('<p class="landing-title">Access Required</p>', unsafe_allow_html=True)
        st.markdown(
            '<p class="landing-copy">To access the archive and generate high-quality imagery '
            'with Nano Banana Pro, verified press credentials (API Key) are required.</p>',
            unsafe_allow_html=True
        )
        key = st.text_input("Gemini API key", type="password", key="api_key_input")
        if st.button("Verify Credentials", type="primary", use_container_width=True):
            st.session_state.key_selector.stage(key)
            if session.request_credential():
                st.rerun()
            else:
                st.error("Credentials could not be verified. Enter a valid API key.")
        st.markdown(
            f'<p style="text-align:center"><a href="{safe_html(config.newsroom.BILLING_DOCS_URL)}" '
            f'target="_blank" rel="noreferrer">Subscription information</a></p>',
            unsafe_allow_html=True
        )


def render_loading(placeholder, snapshot: SessionSnapshot):
    """Busy states: spinner-style card with the phase caption."""
    if not snapshot.state.is_busy:
        return
    placeholder.markdown(f'''
    <div class="loading">
        <h2>Developing Story</h2>
        <p>{safe_html(snapshot.status_caption)}</p>
    </div>
    ''', unsafe_allow_html=True)


def render_search(session: NewsroomSession, snapshot: SessionSnapshot):
    """IDLE and ERROR: the front page search form."""
    _, center, _ = st.columns([1, 3, 1])
    with center:
        st.markdown(
            '<p class="landing-title">What is the world talking about today?</p>',
            unsafe_allow_html=True
        )
        st.markdown(
            f'<p class="landing-copy">Enter a topic below to dispatch our AI journalists. '
            f'We investigate the last {config.newsroom.RESEARCH_WINDOW_MONTHS} months of data '
            f'to bring you the truth.</p>',
            unsafe_allow_html=True
        )

        topic = st.text_input(
            "Topic",
            key="topic_input",
            placeholder="Enter a topic (e.g., 'SpaceX Starship', 'Artificial Intelligence Policy')...",
            label_visibility="collapsed",
        )
        investigate = st.button(
            "Investigate",
            type="primary",
            use_container_width=True,
            disabled=not topic.strip(),
        )

        if snapshot.error:
            st.markdown(
                f'<div class="error-box"><b>ERR:</b> {safe_html(snapshot.error)}</div>',
                unsafe_allow_html=True
            )

    # Faux front page content to make it look populated
    st.markdown('''
    <div class="faux-columns">
        <div><div class="faux-line" style="width:75%"></div><div class="faux-block"></div>
             <div class="faux-line"></div><div class="faux-line" style="width:83%"></div></div>
        <div><div class="faux-line" style="height:1.5rem"></div><div class="faux-line"></div>
             <div class="faux-line"></div><div class="faux-line"></div><div class="faux-line" style="width:80%"></div></div>
        <div><div class="faux-line" style="width:50%"></div><div class="faux-line"></div>
             <div class="faux-line"></div></div>
    </div>
    ''', unsafe_allow_html=True)

    if investigate:
        loading = st.empty()
        session.on_change = lambda snap: render_loading(loading, snap)
        try:
            run_sync(session.submit(topic))
        finally:
            session.on_change = None
        st.rerun()


def render_article(session: NewsroomSession, snapshot: SessionSnapshot):
    """DISPLAY: the full story."""
    article = snapshot.article
    _, center, _ = st.columns([1, 6, 1])
    with center:
        if st.button("Back to Front Page"):
            session.reset()
            st.session_state.topic_input = ""
            st.rerun()

        st.markdown(f'<div class="headline">{safe_html(article.headline)}</div>', unsafe_allow_html=True)
        st.markdown(f'<div class="subheadline">{safe_html(article.subheadline)}</div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="byline">{safe_html(article.byline)} &nbsp;|&nbsp; {safe_html(article.dateline)}</div>',
            unsafe_allow_html=True
        )

        if snapshot.image_url:
            st.markdown(
                f'<img class="lead-image" src="{safe_html(snapshot.image_url)}" alt="{safe_html(article.headline)}"/>'
                f'<div class="image-caption">Illustration generated by Nano Banana Pro</div>',
                unsafe_allow_html=True
            )

        paragraphs = "".join(f"<p>{safe_html(p)}</p>" for p in article.paragraphs)
        st.markdown(f'<div class="body-text">{paragraphs}</div>', unsafe_allow_html=True)

        if article.sources:
            items = "".join(
                f'<li><a href="{safe_html(s.uri)}" target="_blank" rel="noreferrer">{safe_html(s.title)}</a></li>'
                for s in article.sources
            )
            st.markdown(
                f'<div class="sources"><h4>Sources &amp; Citations</h4><ol>{items}</ol></div>',
                unsafe_allow_html=True
            )


def main():
    init_logging()
    session = get_session()

    render_header()

    # Searches never outlive a script run; busy here means one was interrupted
    if session.is_busy:
        session.abandon_search()
    snapshot = session.snapshot()

    if snapshot.state is AppState.AWAITING_CREDENTIAL:
        render_credential_screen(session)
    elif snapshot.state is AppState.DISPLAY and snapshot.article:
        render_article(session, snapshot)
    else:
        render_search(session, snapshot)

    render_footer()


if __name__ == "__main__":
    main()
