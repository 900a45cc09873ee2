"""FastAPI frontend for the Moxie parent dashboard.

Serves the age-content, privacy, education and mood screens as server
rendered HTML. Settings records are stored whole in the ``settingkv`` table;
education and mood screens are built from sample data on every request.
Import-compatible with ``uvicorn moxiedash.webapp:app`` deployments.
"""

from __future__ import annotations

import random
from datetime import datetime
from html import escape as html_escape
from typing import Callable, List, Optional, Sequence

from fastapi import FastAPI, Form, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from starlette.middleware.sessions import SessionMiddleware

from ..education import (
    activities_this_week,
    format_duration,
    sample_progress,
    score_color,
    subject_color,
    weekly_activity,
)
from ..exceptions import InvalidSettingError, ParentLockedError
from ..models import (
    PALETTE,
    RETENTION_PRESETS,
    AgeContentLevel,
    AgeContentSettings,
    ConversationSpeed,
    EducationProgress,
    LoggingLevel,
    MoodDataPoint,
    MoodPeriod,
    PrivacySettings,
    Sentiment,
    TopicCategory,
    VocabularyLevel,
)
from ..mood import chart_points, generate_sample_mood_data, summarize
from ..ops import SaveConfirmation, StructuredLogger
from ..security import ParentGate
from ..settings import add_keyword, remove_keyword, set_retention_days
from ..storage import SettingsRepository
from .config import (
    EVENT_LOG_PATH,
    MOOD_PERIOD_CHOICES,
    PARENT_PIN,
    PIN_LOCKOUT_MINUTES,
    PIN_MAX_ATTEMPTS,
    SESSION_BANNER_KEY,
    SESSION_PARENT_KEY,
    SESSION_SECRET,
)
from .persistence import SqlStore, engine

# ---------------------------------------------------------------------------
# FastAPI application setup
# ---------------------------------------------------------------------------
app = FastAPI(title="Moxie Parent Dashboard")
app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET,
    same_site="lax",
    max_age=None,
)

event_log = StructuredLogger(path=EVENT_LOG_PATH)
repository = SettingsRepository(SqlStore(engine), logger=event_log)
parent_gate = ParentGate(PARENT_PIN, max_attempts=PIN_MAX_ATTEMPTS, lockout_minutes=PIN_LOCKOUT_MINUTES)

_time_provider: Callable[[], datetime] = datetime.now
_rng_provider: Callable[[], random.Random] = random.Random

SETTINGS_ENDPOINTS = {"age-content", "privacy"}

PRIVACY_TOGGLES = (
    ("save_conversation_transcripts", "Save Conversation Transcripts", "Store full conversation text for review"),
    ("enable_sentiment_analysis", "Sentiment Analysis", "Analyze emotional tone of conversations"),
    ("enable_topic_extraction", "Topic Extraction", "Identify topics your child discusses"),
    ("enable_safety_flags", "Safety Flags", "Flag concerning content for review"),
    ("allow_anonymous_analytics", "Anonymous Analytics", "Help improve Moxie with anonymous usage data"),
)

MOOD_PATTERNS = (
    ("Morning Moods", "Your child tends to be happiest in the morning conversations."),
    ("Weekend Effect", "Mood is generally higher on weekends vs weekdays."),
    ("Learning Impact", "Positive mood often follows learning activities."),
)

MOOD_RECOMMENDATIONS = (
    "Schedule Moxie time during morning hours for best engagement.",
    "Consider discussing any negative mood days with your child.",
    "Celebrate positive days with praise and recognition!",
)

EDUCATION_RECOMMENDATIONS = (
    ("Try Science!", "Based on interest in space, try a science lesson about planets."),
    ("Math Challenge", "Ready for the next level! Try harder math problems."),
    ("Reading Time", "A new story about dinosaurs is available!"),
)


def now_local() -> datetime:
    """Return naive local time using the configured provider."""

    return _time_provider()


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------
def parent_authed(request: Request) -> bool:
    return bool(request.session.get(SESSION_PARENT_KEY))


def require_parent(request: Request) -> Optional[RedirectResponse]:
    if not parent_authed(request):
        return RedirectResponse("/parent/login", status_code=302)
    return None


def _mark_saved(request: Request, screen: str) -> None:
    banner = SaveConfirmation()
    banner.show(at=now_local())
    request.session[SESSION_BANNER_KEY] = {"screen": screen, "at": banner.shown_at.isoformat()}


def _banner_visible(request: Request, screen: str) -> bool:
    stored = request.session.get(SESSION_BANNER_KEY)
    if not isinstance(stored, dict) or stored.get("screen") != screen:
        return False
    banner = SaveConfirmation.restore(stored.get("at"))
    visible = banner.is_visible(at=now_local())
    if not visible:
        request.session.pop(SESSION_BANNER_KEY, None)
    return visible


# ---------------------------------------------------------------------------
# Page frame
# ---------------------------------------------------------------------------
def base_styles() -> str:
    return """
    <style>
      :root{
        --bg:#faf5ff; --card:#ffffff; --muted:#6b7280; --accent:#9d4edd; --accent-dark:#7b2cbf;
        --good:#16a34a; --bad:#dc2626; --text:#1f2937;
      }
      body{
        font-family: system-ui,-apple-system,Segoe UI,Roboto,Arial;
        background:linear-gradient(135deg, rgba(157,78,221,0.05), rgba(123,44,191,0.05)), var(--bg);
        color:var(--text); max-width:1080px; margin:0 auto; padding:24px 16px;
      }
      .topbar{display:flex; justify-content:space-between; align-items:center; gap:12px; margin-bottom:18px;}
      .topbar h1{margin:0; font-size:26px;}
      .muted{color:var(--muted); font-size:13px;}
      .card{background:var(--card); border-radius:12px; padding:16px; margin-bottom:18px; box-shadow:0 1px 3px rgba(15,23,42,0.08);}
      .grid{display:grid; gap:12px; grid-template-columns:repeat(auto-fit,minmax(200px,1fr));}
      .grid-3{display:grid; gap:12px; grid-template-columns:repeat(3,1fr);}
      .option{display:flex; gap:10px; align-items:flex-start; border:2px solid transparent; border-radius:12px; padding:12px; background:#f9fafb; cursor:pointer;}
      .option.selected{border-color:var(--accent);}
      .pill{display:inline-flex; align-items:center; gap:6px; padding:4px 10px; border-radius:999px; background:#ede9fe; font-size:13px;}
      .stat{text-align:center;}
      .stat .value{font-size:24px; font-weight:700;}
      .bar{height:8px; border-radius:4px; background:#e5e7eb; overflow:hidden;}
      .bar > span{display:block; height:100%;}
      .banner{position:sticky; top:8px; background:rgba(22,163,74,0.9); color:#fff; padding:10px 14px; border-radius:8px; margin-bottom:14px;}
      .error{background:rgba(220,38,38,0.1); color:var(--bad); padding:10px 14px; border-radius:8px; margin-bottom:14px;}
      button, .button-link{background:var(--accent); color:#fff; border:none; border-radius:10px; padding:8px 14px; font-weight:600; cursor:pointer; text-decoration:none;}
      button.secondary, .button-link.secondary{background:#e5e7eb; color:var(--text);}
      button.danger{background:var(--bad);}
      .link-danger{background:none; border:none; color:#ef4444; cursor:pointer; font:inherit; padding:0;}
      .row{display:flex; align-items:center; justify-content:space-between; gap:12px; padding:8px 0; border-top:1px solid #f3f4f6;}
      .row:first-child{border-top:none;}
      .week{display:flex; gap:8px;}
      .week span{width:28px; height:28px; border-radius:50%; display:inline-flex; align-items:center; justify-content:center; background:#e5e7eb; color:#fff; font-size:12px;}
      .week span.on{background:var(--good);}
    </style>
    """


def frame(title: str, inner: str) -> str:
    return (
        "<html><head><meta charset='utf-8'><meta name='viewport' "
        f"content='width=device-width,initial-scale=1'><title>{html_escape(title)}</title>"
        f"{base_styles()}</head><body>{inner}</body></html>"
    )


def render_page(title: str, inner: str, *, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(frame(title, inner), status_code=status_code)


def header(title: str, subtitle: str, *, actions: str = "") -> str:
    return f"""
    <div class='topbar'>
      <div><h1>{html_escape(title)}</h1><div class='muted'>{html_escape(subtitle)}</div></div>
      <div style='display:flex; gap:8px; align-items:center;'>{actions}<a class='button-link secondary' href='/'>Close</a></div>
    </div>
    """


def color_hex(name: str) -> str:
    return PALETTE.get(name, PALETTE["gray"])


def _checked(flag: bool) -> str:
    return " checked" if flag else ""


# ---------------------------------------------------------------------------
# Form parsing
# ---------------------------------------------------------------------------
def _form_flag(form, name: str) -> bool:
    return str(form.get(name, "")).lower() in {"on", "true", "1", "yes"}


def parse_age_content_form(form) -> AgeContentSettings:
    """Build a whole record from the submitted form; unknown choices raise ``InvalidSettingError``."""

    try:
        topics: List[TopicCategory] = []
        for raw in form.getlist("topics"):
            topic = TopicCategory(raw)
            if topic not in topics:
                topics.append(topic)
        return AgeContentSettings(
            content_level=AgeContentLevel(form.get("content_level", "")),
            auto_detect_age=_form_flag(form, "auto_detect_age"),
            vocabulary_level=VocabularyLevel(form.get("vocabulary_level", "")),
            topics_allowed=topics,
            conversation_speed=ConversationSpeed(form.get("conversation_speed", "")),
        )
    except ValueError as exc:
        raise InvalidSettingError(str(exc)) from exc


def parse_privacy_form(form, *, keywords: Sequence[str]) -> PrivacySettings:
    try:
        level = LoggingLevel(form.get("logging_level", ""))
        days = int(form.get("data_retention_days", ""))
    except ValueError as exc:
        raise InvalidSettingError(str(exc)) from exc
    settings = PrivacySettings(
        logging_level=level,
        custom_blocked_keywords=list(keywords),
        **{name: _form_flag(form, name) for name, _, _ in PRIVACY_TOGGLES},
    )
    set_retention_days(settings, days)
    return settings


# ---------------------------------------------------------------------------
# Index, health and login
# ---------------------------------------------------------------------------
@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    screens = (
        ("/parent/age-content", "Age-Appropriate Content", "Adjust how Moxie talks with your child"),
        ("/parent/education", "Learning Progress", "Track your child's educational journey with Moxie"),
        ("/parent/mood", "Mood Trends", "Emotional patterns across conversations"),
        ("/parent/privacy", "Privacy Settings", "Control what data is collected and how long it's stored"),
    )
    cards = "".join(
        f"<a class='card' style='display:block; text-decoration:none; color:inherit;' href='{href}'>"
        f"<strong>{html_escape(title)}</strong><div class='muted'>{html_escape(blurb)}</div></a>"
        for href, title, blurb in screens
    )
    if parent_authed(request):
        session_action = (
            "<form method='post' action='/parent/logout'><button class='secondary' type='submit'>Sign out</button></form>"
        )
    else:
        session_action = "<a class='button-link' href='/parent/login'>Parent Login</a>"
    inner = f"""
    <div class='topbar'><h1>Parent Dashboard</h1>{session_action}</div>
    <div class='grid'>{cards}</div>
    """
    return render_page("Parent Dashboard", inner)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


def _login_page(message: str = "", *, status_code: int = 200) -> HTMLResponse:
    error = f"<div class='error'>{html_escape(message)}</div>" if message else ""
    inner = f"""
    <div class='card' style='max-width:360px; margin:40px auto;'>
      <h3>Parent Login</h3>
      {error}
      <form method='post' action='/parent/login'>
        <label>PIN</label><input name='pin' type='password' inputmode='numeric' placeholder='******' required>
        <button type='submit' style='margin-top:10px;'>Sign In</button>
      </form>
      <p class='muted' style='margin-top:6px;'><a href='/'>&larr; Back</a></p>
    </div>
    """
    return render_page("Parent Login", inner, status_code=status_code)


@app.get("/parent/login", response_class=HTMLResponse)
def parent_login_page(request: Request):
    if parent_authed(request):
        return RedirectResponse("/", status_code=302)
    return _login_page()


@app.post("/parent/login")
def parent_login(request: Request, pin: str = Form(...)):
    now = now_local()
    try:
        accepted = parent_gate.verify(pin.strip(), at=now)
    except ParentLockedError as exc:
        event_log.log("parent_login_failed", reason="locked")
        return _login_page(str(exc), status_code=429)
    if not accepted:
        event_log.log("parent_login_failed", reason="bad_pin", remaining=parent_gate.remaining_attempts(at=now))
        return _login_page("Incorrect PIN.", status_code=401)
    request.session[SESSION_PARENT_KEY] = True
    event_log.log("parent_login")
    return RedirectResponse("/", status_code=302)


@app.post("/parent/logout")
def parent_logout(request: Request):
    request.session.clear()
    return RedirectResponse("/", status_code=302)


# ---------------------------------------------------------------------------
# Age content settings
# ---------------------------------------------------------------------------
def render_age_content(settings: AgeContentSettings, *, banner: bool = False, error: str = "") -> str:
    levels = "".join(
        f"""
        <label class='option{" selected" if level is settings.content_level else ""}'
               style='border-color:{color_hex(level.color) if level is settings.content_level else "transparent"};'>
          <input type='radio' name='content_level' value='{level.value}'{_checked(level is settings.content_level)}>
          <div>
            <strong>{html_escape(level.display_name)}</strong>
            <div class='muted'>{html_escape(level.description)}</div>
            <div>{"".join(f"<span class='pill'>{html_escape(feature)}</span> " for feature in level.features)}</div>
          </div>
        </label>
        """
        for level in AgeContentLevel
    )
    vocabulary = "".join(
        f"<label class='pill'><input type='radio' name='vocabulary_level' value='{level.value}'"
        f"{_checked(level is settings.vocabulary_level)}> {html_escape(level.display_name)}</label> "
        for level in VocabularyLevel
    )
    topics = "".join(
        f"<label class='option{' selected' if topic in settings.topics_allowed else ''}'>"
        f"<input type='checkbox' name='topics' value='{topic.value}'{_checked(topic in settings.topics_allowed)}>"
        f" {html_escape(topic.display_name)}</label>"
        for topic in TopicCategory
    )
    speeds = "".join(
        f"<label class='pill'><input type='radio' name='conversation_speed' value='{speed.value}'"
        f"{_checked(speed is settings.conversation_speed)}> {html_escape(speed.display_name)}</label> "
        for speed in ConversationSpeed
    )
    notice = "<div class='banner'>Age settings saved</div>" if banner else ""
    problem = f"<div class='error'>{html_escape(error)}</div>" if error else ""
    top = header(
        "Age-Appropriate Content",
        "Adjust how Moxie talks with your child",
        actions="<button form='age-form' type='submit'>Save</button>",
    )
    return f"""
    {top}
    {notice}{problem}
    <form id='age-form' method='post' action='/parent/age-content'>
      <div class='card'>
        <h3>Content Level</h3>
        <label><input type='checkbox' name='auto_detect_age'{_checked(settings.auto_detect_age)}>
          Auto-detect age from conversations</label>
        <div style='display:flex; flex-direction:column; gap:10px; margin-top:12px;'>{levels}</div>
      </div>
      <div class='card'><h3>Vocabulary Level</h3>{vocabulary}</div>
      <div class='card'>
        <h3>Allowed Topics</h3>
        <div class='muted'>Select which topics Moxie can discuss with your child</div>
        <div class='grid-3' style='margin-top:12px;'>{topics}</div>
      </div>
      <div class='card'>
        <h3>Response Speed</h3>
        <div class='muted'>How quickly Moxie speaks (for attention span)</div>
        {speeds}
      </div>
    </form>
    <div class='card'>
      <h3>Example Response Preview</h3>
      <div class='muted'>Here's how Moxie would explain "Why is the sky blue?" at your selected level:</div>
      <p style='background:rgba(37,99,235,0.1); padding:12px; border-radius:12px;'>
        {html_escape(settings.content_level.preview_response)}</p>
    </div>
    """


@app.get("/parent/age-content", response_class=HTMLResponse)
def age_content_page(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    settings = repository.load_age_content()
    return render_page(
        "Age-Appropriate Content",
        render_age_content(settings, banner=_banner_visible(request, "age-content")),
    )


@app.post("/parent/age-content")
async def age_content_save(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    form = await request.form()
    try:
        settings = parse_age_content_form(form)
    except InvalidSettingError as exc:
        current = repository.load_age_content()
        return render_page("Age-Appropriate Content", render_age_content(current, error=str(exc)), status_code=400)
    repository.save_age_content(settings)
    _mark_saved(request, "age-content")
    return RedirectResponse("/parent/age-content", status_code=302)


# ---------------------------------------------------------------------------
# Privacy settings
# ---------------------------------------------------------------------------
def render_privacy(settings: PrivacySettings, *, banner: bool = False, error: str = "") -> str:
    levels = "".join(
        f"""
        <label class='option{" selected" if level is settings.logging_level else ""}'
               style='border-color:{color_hex(level.color) if level is settings.logging_level else "transparent"};'>
          <input type='radio' name='logging_level' value='{level.value}'{_checked(level is settings.logging_level)}>
          <div><strong>{html_escape(level.display_name)}</strong>
          <div class='muted'>{html_escape(level.description)}</div></div>
        </label>
        """
        for level in LoggingLevel
    )
    toggles = "".join(
        f"<label class='row'><span><strong>{html_escape(title)}</strong><div class='muted'>{html_escape(blurb)}</div>"
        f"</span><input type='checkbox' name='{name}'{_checked(getattr(settings, name))}></label>"
        for name, title, blurb in PRIVACY_TOGGLES
    )
    retention = "".join(
        f"<label class='pill'><input type='radio' name='data_retention_days' value='{days}'"
        f"{_checked(days == settings.data_retention_days)}> {days} days</label> "
        for days in RETENTION_PRESETS
    )
    if settings.custom_blocked_keywords:
        keywords = "".join(
            f"<form method='post' action='/parent/privacy/keywords/remove' style='display:inline;'>"
            f"<input type='hidden' name='keyword' value='{html_escape(keyword)}'>"
            f"<span class='pill'>{html_escape(keyword)} <button class='link-danger' type='submit'>&times;</button></span>"
            f"</form> "
            for keyword in settings.custom_blocked_keywords
        )
    else:
        keywords = "<div class='muted'>No custom keywords added</div>"
    notice = "<div class='banner'>Privacy settings saved</div>" if banner else ""
    problem = f"<div class='error'>{html_escape(error)}</div>" if error else ""
    top = header(
        "Privacy Settings",
        "Control what data is collected and how long it's stored",
        actions="<button form='privacy-form' type='submit'>Save</button>",
    )
    return f"""
    {top}
    {notice}{problem}
    <form id='privacy-form' method='post' action='/parent/privacy'>
      <div class='card'>
        <h3>Monitoring Level</h3>
        <div class='muted'>Choose how much data Moxie collects about your child's activity</div>
        <div style='display:flex; flex-direction:column; gap:10px; margin-top:12px;'>{levels}</div>
      </div>
      <div class='card'><h3>Data Collection</h3>{toggles}</div>
      <div class='card'>
        <h3>Data Retention</h3>
        <div class='muted'>How long to keep conversation history and logs</div>
        {retention}
        <div class='muted'>Data older than {settings.data_retention_days} days will be automatically deleted</div>
      </div>
    </form>
    <div class='card'>
      <h3>Custom Blocked Keywords</h3>
      <div class='muted'>Add words or phrases that should trigger safety flags</div>
      <form method='post' action='/parent/privacy/keywords'>
        <input name='keyword' placeholder='Add keyword...' required> <button type='submit'>Add</button>
      </form>
      <div style='margin-top:10px;'>{keywords}</div>
    </div>
    <div class='card'>
      <h3>Data Management</h3>
      <a class='button-link secondary' href='/parent/privacy/export'>Export Data</a>
      <form method='post' action='/parent/privacy/delete' style='display:inline;'>
        <button class='danger' type='submit'>Delete All Data</button>
      </form>
      <div class='muted'>Deleting data is permanent and cannot be undone</div>
    </div>
    """


@app.get("/parent/privacy", response_class=HTMLResponse)
def privacy_page(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    settings = repository.load_privacy()
    return render_page("Privacy Settings", render_privacy(settings, banner=_banner_visible(request, "privacy")))


@app.post("/parent/privacy")
async def privacy_save(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    form = await request.form()
    current = repository.load_privacy()
    try:
        settings = parse_privacy_form(form, keywords=current.custom_blocked_keywords)
    except InvalidSettingError as exc:
        return render_page("Privacy Settings", render_privacy(current, error=str(exc)), status_code=400)
    repository.save_privacy(settings)
    _mark_saved(request, "privacy")
    return RedirectResponse("/parent/privacy", status_code=302)


@app.post("/parent/privacy/keywords")
def privacy_add_keyword(request: Request, keyword: str = Form("")):
    if (redirect := require_parent(request)) is not None:
        return redirect
    settings = repository.load_privacy()
    if add_keyword(settings, keyword):
        repository.save_privacy(settings)
        _mark_saved(request, "privacy")
    return RedirectResponse("/parent/privacy", status_code=302)


@app.post("/parent/privacy/keywords/remove")
def privacy_remove_keyword(request: Request, keyword: str = Form(...)):
    if (redirect := require_parent(request)) is not None:
        return redirect
    settings = repository.load_privacy()
    if remove_keyword(settings, keyword):
        repository.save_privacy(settings)
        _mark_saved(request, "privacy")
    return RedirectResponse("/parent/privacy", status_code=302)


@app.get("/parent/privacy/export")
def privacy_export(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    payload = {
        "exported_at": now_local().isoformat(),
        "settings": repository.export_all(),
    }
    return JSONResponse(
        payload,
        headers={"Content-Disposition": "attachment; filename=moxie-settings.json"},
    )


@app.post("/parent/privacy/delete")
def privacy_delete(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    repository.delete_all()
    return RedirectResponse("/parent/privacy", status_code=302)


# ---------------------------------------------------------------------------
# Education progress
# ---------------------------------------------------------------------------
def render_education(progress: EducationProgress, *, now: datetime, week: Sequence[bool]) -> str:
    this_week = len(activities_this_week(progress, now))
    stats = (
        ("Total Lessons", str(progress.total_lessons), "blue"),
        ("Average Score", f"{int(progress.average_score)}%", "yellow"),
        ("Subjects", str(len(progress.subjects)), "purple"),
        ("This Week", str(this_week), "green"),
    )
    stat_cards = "".join(
        f"<div class='card stat'><div class='value' style='color:{color_hex(color)};'>{value}</div>"
        f"<div class='muted'>{title}</div></div>"
        for title, value, color in stats
    )
    days_on = sum(1 for flag in week if flag)
    strip = "".join(f"<span class='{'on' if flag else ''}'>{'&#10003;' if flag else ''}</span>" for flag in week)
    subjects = "".join(
        f"""
        <div class='card'>
          <div class='row'><strong>{html_escape(subject.subject)}</strong>
            <span style='color:{color_hex(subject.color)};'>{int(subject.average_score)}%</span></div>
          <div class='bar'><span style='width:{subject.completion * 100:.0f}%; background:{color_hex(subject.color)};'></span></div>
          <div class='muted'>{subject.lessons_completed}/{subject.total_lessons} lessons</div>
        </div>
        """
        for subject in progress.subjects
    )
    activities = "".join(
        f"<div class='row'><span><span style='color:{color_hex(subject_color(activity.subject))};'>&#9679;</span> "
        f"<strong>{html_escape(activity.title)}</strong> <span class='muted'>{html_escape(activity.subject)} &bull; "
        f"{format_duration(activity.duration_seconds)}</span></span>"
        + (
            f"<span style='color:{color_hex(score_color(activity.score))}; font-weight:700;'>{activity.score}%</span>"
            if activity.score is not None
            else "<span class='muted'>&ndash;</span>"
        )
        + "</div>"
        for activity in progress.recent_activities[:5]
    )
    recommendations = "".join(
        f"<div class='row'><span><strong>{html_escape(title)}</strong><div class='muted'>{html_escape(text)}</div></span>"
        f"<button class='secondary' type='button'>Start</button></div>"
        for title, text in EDUCATION_RECOMMENDATIONS
    )
    return f"""
    {header("Learning Progress", "Track your child's educational journey with Moxie")}
    <div class='grid'>{stat_cards}</div>
    <div class='card'>
      <h3>&#128293; {progress.streak_days} Day Streak!</h3>
      <div class='muted'>Keep learning every day!</div>
      <div style='margin-top:10px;'><strong>This Week</strong></div>
      <div class='week'>{strip}</div>
      <div class='muted'>{days_on} of 7 days with learning!</div>
    </div>
    <h3>Subject Progress</h3>
    <div class='grid'>{subjects}</div>
    <div class='card'><h3>Recent Learning Activities</h3>{activities}</div>
    <div class='card'><h3>Recommended Next Steps</h3>{recommendations}</div>
    """


@app.get("/parent/education", response_class=HTMLResponse)
def education_page(request: Request):
    if (redirect := require_parent(request)) is not None:
        return redirect
    now = now_local()
    progress = sample_progress(now)
    week = weekly_activity(_rng_provider())
    return render_page("Learning Progress", render_education(progress, now=now, week=week))


# ---------------------------------------------------------------------------
# Mood trends
# ---------------------------------------------------------------------------
def mood_chart_svg(points: Sequence[MoodDataPoint], period: MoodPeriod, *, width: int = 600, height: int = 200) -> str:
    """Inline SVG line chart of mood scores on a 1-5 grid."""

    grid_labels = {5: Sentiment.VERY_POSITIVE, 4: Sentiment.POSITIVE, 3: Sentiment.NEUTRAL,
                   2: Sentiment.NEGATIVE, 1: Sentiment.CONCERNING}
    parts: List[str] = []
    for value in range(5, -1, -1):
        y = height - (value / 5 * height) + 10
        parts.append(f"<line x1='35' x2='{width - 5}' y1='{y:.1f}' y2='{y:.1f}' stroke='#e5e7eb' stroke-width='1'/>")
        if value in grid_labels:
            parts.append(f"<text x='4' y='{y + 5:.1f}' font-size='14'>{grid_labels[value].emoji}</text>")
    plotted = chart_points(points, period, width=width, height=height)
    if plotted:
        path = " ".join(f"{point.x},{point.y}" for point in plotted)
        parts.append(f"<polyline points='{path}' fill='none' stroke='{PALETTE['purple']}' stroke-width='2'/>")
        parts.extend(
            f"<circle cx='{point.x}' cy='{point.y}' r='4' fill='{color_hex(point.color)}'/>" for point in plotted
        )
    return (
        f"<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 {width} {height + 20}' "
        f"width='100%' role='img' aria-label='Mood chart'>{''.join(parts)}</svg>"
    )


def render_mood(points: Sequence[MoodDataPoint], period: MoodPeriod) -> str:
    summary = summarize(points)
    selector = "".join(
        f"<a class='button-link{'' if choice is period else ' secondary'}' href='/parent/mood?period={choice.days}'>"
        f"{html_escape(choice.value)}</a> "
        for choice in MoodPeriod
    )
    cards = (
        ("Average Mood", summary.average.emoji, summary.average.display_name, summary.average.color),
        ("Trend", summary.trend.emoji, summary.trend.description, summary.trend.color),
        ("Best Day", "\U0001F4C5", summary.best_day, "green"),
        ("Conversations", "\U0001F4AC", str(summary.conversations), "blue"),
    )
    summary_cards = "".join(
        f"<div class='card stat'><div style='font-size:28px;'>{emoji}</div>"
        f"<div class='value' style='color:{color_hex(color)}; font-size:18px;'>{html_escape(value)}</div>"
        f"<div class='muted'>{title}</div></div>"
        for title, emoji, value, color in cards
    )
    distribution = "".join(
        f"<div class='row'><span style='width:140px;'>{sentiment.emoji} {sentiment.display_name}</span>"
        f"<div class='bar' style='flex:1;'><span style='width:{summary.distribution.get(sentiment, 0.0) * 100:.0f}%;"
        f" background:{color_hex(sentiment.color)};'></span></div>"
        f"<span class='muted' style='width:48px; text-align:right;'>{summary.distribution.get(sentiment, 0.0) * 100:.0f}%</span></div>"
        for sentiment in Sentiment
    )
    patterns = "".join(
        f"<div class='row'><span><strong>{html_escape(title)}</strong><div class='muted'>{html_escape(text)}</div></span></div>"
        for title, text in MOOD_PATTERNS
    )
    recommendations = "".join(f"<div class='row'><span>{html_escape(text)}</span></div>" for text in MOOD_RECOMMENDATIONS)
    return f"""
    {header("Mood Trends", "Emotional patterns across conversations")}
    <div style='margin-bottom:14px;'>{selector}</div>
    <div class='grid'>{summary_cards}</div>
    <div class='card'><h3>Mood Over Time</h3>{mood_chart_svg(points, period)}</div>
    <div class='card'><h3>Mood Distribution</h3>{distribution}</div>
    <div class='card'><h3>Patterns Detected</h3>{patterns}</div>
    <div class='card'><h3>Recommendations</h3>{recommendations}</div>
    """


@app.get("/parent/mood", response_class=HTMLResponse)
def mood_page(request: Request, period: int = Query(7)):
    if (redirect := require_parent(request)) is not None:
        return redirect
    selected = MoodPeriod.from_days(period if period in MOOD_PERIOD_CHOICES else 7)
    points = generate_sample_mood_data(selected, now=now_local(), rng=_rng_provider())
    return render_page("Mood Trends", render_mood(points, selected))


# ---------------------------------------------------------------------------
# JSON API
# ---------------------------------------------------------------------------
@app.get("/api/settings/{name}")
def settings_api(request: Request, name: str):
    if not parent_authed(request):
        return JSONResponse({"detail": "Parent login required."}, status_code=401)
    if name not in SETTINGS_ENDPOINTS:
        return JSONResponse({"detail": f"Unknown settings record '{name}'."}, status_code=404)
    record = repository.load_age_content() if name == "age-content" else repository.load_privacy()
    return JSONResponse(record.to_dict())


@app.get("/favicon.ico")
def favicon() -> Response:
    return Response(status_code=204)


__all__ = [
    "app",
    "event_log",
    "repository",
    "parent_gate",
    "now_local",
    "parent_authed",
    "require_parent",
    "parse_age_content_form",
    "parse_privacy_form",
    "render_age_content",
    "render_privacy",
    "render_education",
    "render_mood",
    "mood_chart_svg",
]
