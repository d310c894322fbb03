"""
adapters.cli.main - CLI adapter for Remissio.

Uses the same ServiceFactory and services as the tests, so all behaviour
(auth, onboarding, tracking, dashboard) is identical. The signed-in user
is kept in the current_user key of the configured store, so it survives
between invocations exactly as it would in browser storage.

Output is rendered in the signed-in user's profile language, or in
REMISSIO_LANGUAGE when there is no user or the profile has none.

Commands
--------
  register      Create an account (and sign in)
  login         Sign in
  logout        Sign out
  whoami        Show the signed-in user
  onboard       Complete the first-run profile questions
  profile       Show your profile
  profile-edit  Change profile fields
  language      Set the interface language
  symptoms      Fill in the PUCAI questionnaire
  mood          Log your mood (1-5)
  meal          Log a meal
  dashboard     Latest score, today's meals, latest mood
  timeline      Day-by-day history and averages

Usage
-----
  remissio register --email me@example.com
  remissio symptoms -a stomachache=1 -a rectal_bleeding=0 ...
  remissio timeline --days 14
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from remissio import __version__
from remissio.application.dto import (
    MealEntry,
    MoodEntry,
    OnboardingRequest,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
)
from remissio.domain.entities import User
from remissio.domain.exceptions import (
    DomainError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotSignedInError,
    OnboardingRequiredError,
)
from remissio.domain.i18n import Translator
from remissio.domain.models import Language
from remissio.domain.scoring import MEAL_TYPES, mood_emoji
from remissio.factory import ServiceFactory
from remissio.infrastructure.config import Settings

console = Console()
app = typer.Typer(
    help="Remissio - track PUCAI score, meals and mood.",
    add_completion=False,
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as exc:
        _fail(f"Invalid configuration: {exc}")


def _make_factory() -> ServiceFactory:
    factory = ServiceFactory(_load_settings())
    factory.initialize()
    return factory


def _fail(message: str) -> None:
    console.print(f"[bold red]{message}[/bold red]")
    raise typer.Exit(code=1)


def _require_user(factory: ServiceFactory) -> User:
    """Return the signed-in user or exit with a user-friendly error."""
    try:
        return factory.create_authentication_service().require_user()
    except NotSignedInError:
        tr = factory.create_translator()
        console.print(f"[bold red]{tr.t('not_logged_in')}[/bold red] {tr.t('login_hint')}")
        raise typer.Exit(code=1)


def _signed_in(factory: ServiceFactory) -> tuple[User, Translator]:
    user = _require_user(factory)
    return user, factory.create_translator(user)


def _show(value: object) -> str:
    return "[dim]-[/dim]" if value in (None, "") else str(value)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"remissio v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Remissio command-line interface."""
    level = logging.DEBUG if verbose else _load_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands: Auth
# ---------------------------------------------------------------------------

@app.command()
def register(
    email: str = typer.Option(..., prompt=True, help="Account email."),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password.",
    ),
    name: str = typer.Option("", help="Display name."),
) -> None:
    """Create a new account and sign in."""
    factory = _make_factory()
    tr = factory.create_translator()
    try:
        user = factory.create_authentication_service().sign_up(
            SignUpRequest(email=email, password=password, name=name)
        )
    except DuplicateEmailError:
        _fail(tr.t("already_registered", email=email))
    except DomainError as exc:
        _fail(str(exc))

    console.print(Panel(
        f"[bold green]{tr.t('sign_up_success')}[/bold green]\n"
        f"{tr.t('welcome')} [bold]{user.name or user.email}[/bold]\n"
        f"{tr.t('run_onboard')}",
        border_style="green",
    ))


@app.command()
def login(
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in to your account."""
    factory = _make_factory()
    try:
        user = factory.create_authentication_service().sign_in(
            SignInRequest(email=email, password=password)
        )
    except InvalidCredentialsError:
        _fail(factory.create_translator().t("login_failed"))
    except DomainError as exc:
        _fail(str(exc))

    tr = factory.create_translator(user)
    console.print(Panel(
        f"[bold green]{tr.t('sign_in_success')}[/bold green] "
        f"{tr.t('welcome_back')} [bold]{user.name or user.email}[/bold]",
        border_style="green",
    ))


@app.command()
def logout(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
) -> None:
    """Sign out."""
    factory = _make_factory()
    auth = factory.create_authentication_service()
    user = auth.current_user()
    if user is None:
        console.print(f"[dim]{factory.create_translator().t('not_logged_in')}[/dim]")
        return
    tr = factory.create_translator(user)
    if yes or Confirm.ask(tr.t("confirm_sign_out", email=user.email)):
        auth.sign_out()
        console.print(f"[green]{tr.t('logged_out')}[/green]")


@app.command()
def whoami() -> None:
    """Show the currently logged-in user."""
    factory = _make_factory()
    user = factory.create_authentication_service().current_user()
    if user is None:
        console.print(f"[dim]{factory.create_translator().t('not_logged_in')}[/dim]")
        return
    tr = factory.create_translator(user)
    console.print(f"{tr.t('logged_in_as', email=user.email)} (id={user.id})")


# ---------------------------------------------------------------------------
# Commands: Profile
# ---------------------------------------------------------------------------

@app.command()
def onboard(
    age: int = typer.Option(..., prompt=True),
    diagnosis_year: int = typer.Option(..., prompt="Year of diagnosis"),
    medication: str = typer.Option("", prompt="Current medication", show_default=False),
    notes: str = typer.Option("", prompt=True, show_default=False),
) -> None:
    """Answer the first-run profile questions."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    try:
        factory.create_profile_service().complete_onboarding(user, OnboardingRequest(
            age=age,
            year_of_diagnosis=diagnosis_year,
            current_medication=medication,
            notes=notes,
        ))
    except DomainError as exc:
        _fail(str(exc))
    console.print(f"[bold green]{tr.t('profile_created')}[/bold green] {tr.t('run_dashboard')}")


@app.command()
def profile() -> None:
    """Show your profile."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    try:
        p = factory.create_profile_service().get_profile(user)
    except DomainError as exc:
        _fail(str(exc))

    t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row(tr.t("name"), _show(user.name))
    t.add_row(tr.t("email"), p.email)
    t.add_row(tr.t("gender"), _show(p.gender))
    t.add_row(tr.t("birth_date"), _show(p.date_of_birth))
    t.add_row(tr.t("age"), _show(p.age))
    t.add_row(tr.t("weight"), _show(p.weight))
    t.add_row(tr.t("height"), _show(p.height_in_cm))
    t.add_row(tr.t("diagnosis_year"), _show(p.year_of_diagnosis))
    t.add_row(tr.t("current_medication"), _show(p.current_medication))
    t.add_row(tr.t("notes"), _show(p.notes))
    t.add_row(tr.t("language"), tr.language.display_name)
    t.add_row(
        tr.t("onboarding"),
        tr.t("onboarding_complete") if p.onboarding_completed
        else f"[yellow]{tr.t('onboarding_pending')}[/yellow]",
    )
    console.print(Panel(t, title=tr.t("profile_settings"), border_style="blue"))


@app.command("profile-edit")
def profile_edit(
    name: Optional[str] = typer.Option(None),
    gender: Optional[str] = typer.Option(None),
    birth_date: Optional[str] = typer.Option(None, help="YYYY-MM-DD"),
    age: Optional[int] = typer.Option(None),
    weight: Optional[float] = typer.Option(None, help="Kilograms."),
    height: Optional[int] = typer.Option(None, help="Centimetres."),
    diagnosis_year: Optional[int] = typer.Option(None),
    medication: Optional[str] = typer.Option(None),
    notes: Optional[str] = typer.Option(None),
    language: Optional[str] = typer.Option(None),
) -> None:
    """Change one or more profile fields."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    update = ProfileUpdate(
        name=name,
        gender=gender,
        date_of_birth=birth_date,
        age=age,
        weight=weight,
        height_in_cm=height,
        year_of_diagnosis=diagnosis_year,
        current_medication=medication,
        notes=notes,
        language=language,
    )
    if update == ProfileUpdate():
        _fail(tr.t("nothing_to_change"))
    try:
        factory.create_profile_service().update_profile(user, update)
    except DomainError as exc:
        _fail(str(exc))
    console.print(f"[green]{factory.create_translator(user).t('changes_saved')}[/green]")


@app.command()
def language(
    code: str = typer.Argument(..., help="One of: " + ", ".join(l.value for l in Language)),
) -> None:
    """Set the interface language."""
    factory = _make_factory()
    user = _require_user(factory)
    try:
        factory.create_profile_service().set_language(user, code)
    except DomainError as exc:
        _fail(str(exc))
    tr = factory.create_translator(user)
    console.print(tr.t("language_set", language=f"[bold]{tr.language.display_name}[/bold]"))


# ---------------------------------------------------------------------------
# Commands: Tracking
# ---------------------------------------------------------------------------

def _parse_answers(pairs: List[str], tr: Translator) -> dict[str, int]:
    answers: dict[str, int] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not raw.strip().lstrip("-").isdigit():
            _fail(tr.t("invalid_answer_format", pair=pair))
        answers[key.strip()] = int(raw)
    return answers


@app.command()
def symptoms(
    answer: Optional[List[str]] = typer.Option(
        None, "--answer", "-a",
        help="question=value; repeat for each question. Prompts when omitted.",
    ),
) -> None:
    """Fill in the PUCAI questionnaire."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    service = factory.create_symptom_service()
    questionnaire = service.questionnaire

    if answer:
        answers = _parse_answers(answer, tr)
    else:
        answers = {}
        total = len(questionnaire.questions)
        for i, q in enumerate(questionnaire.questions, start=1):
            t = Table(box=box.SIMPLE, show_header=False)
            for opt in q.options:
                t.add_row(
                    str(opt.value), tr.option(q, opt), f"[dim]{opt.points} {tr.t('points')}[/dim]",
                )
            console.print(Panel(
                t, title=f"{i}/{total} {tr.question(q)}", subtitle=tr.description(q),
            ))
            choice = Prompt.ask(tr.t("answer"), choices=[str(o.value) for o in q.options])
            answers[q.id] = int(choice)

    try:
        pucai = service.record(user, answers)
    except DomainError as exc:
        _fail(str(exc))
    category = service.category(pucai.sum)
    console.print(Panel(
        tr.t("pucai_saved", score=pucai.sum, category=tr.category(category)),
        border_style="green",
    ))


@app.command()
def mood(
    amount: int = typer.Argument(..., help="1 = very bad ... 5 = very good"),
    notes: Optional[str] = typer.Option(None),
) -> None:
    """Log how you feel."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    try:
        saved = factory.create_mood_service().record(user, MoodEntry(amount=amount, notes=notes))
    except DomainError as exc:
        _fail(str(exc))
    console.print(
        f"[green]{tr.t('mood_saved', emoji=mood_emoji(saved.amount), label=tr.mood(saved.amount))}[/green]"
    )


@app.command()
def meal(
    name: str = typer.Argument(...),
    time: Optional[str] = typer.Option(None, help="HH:MM, defaults to now."),
    type: Optional[str] = typer.Option(None, help=", ".join(MEAL_TYPES) + "."),
    ingredients: str = typer.Option(""),
    notes: Optional[str] = typer.Option(None),
    image: Optional[str] = typer.Option(None, help="Path of a photo of the meal."),
) -> None:
    """Log a meal."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    entry = MealEntry(
        name=name,
        time=time or datetime.now().strftime("%H:%M"),
        type=type,
        ingredients=ingredients,
        notes=notes,
        image_url=image,
    )
    try:
        saved = factory.create_meal_service().record(user, entry)
    except DomainError as exc:
        _fail(str(exc))
    console.print(f"[green]{tr.t('meal_saved', name=saved.name, time=saved.time)}[/green]")


# ---------------------------------------------------------------------------
# Commands: Overview
# ---------------------------------------------------------------------------

@app.command()
def dashboard() -> None:
    """Latest PUCAI score, today's meals and latest mood."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    try:
        summary = factory.create_dashboard_service().summary(user)
    except OnboardingRequiredError:
        _fail(tr.t("onboarding_required"))
    except DomainError as exc:
        _fail(str(exc))

    if summary.latest_pucai:
        cat = summary.pucai_category
        console.print(Panel(
            f"[bold]{summary.latest_pucai.sum}[/bold] {tr.t('points')}  "
            f"[{cat.color}]{tr.category(cat)}[/{cat.color}]\n"
            f"[dim]{summary.latest_pucai.created_at}[/dim]",
            title=tr.t("pucai_score"), border_style="blue",
        ))
    else:
        console.print(Panel(f"[dim]{tr.t('no_score_yet')}[/dim]", title=tr.t("pucai_score")))

    if summary.today_meals:
        t = Table(box=box.SIMPLE)
        t.add_column(tr.t("meal_time"))
        t.add_column(tr.t("meal_name"))
        t.add_column(tr.t("meal_type"))
        for m in summary.today_meals:
            t.add_row(m.time, m.name, tr.meal_type(m.type))
        console.print(Panel(t, title=f"{tr.t('meals_today')} ({len(summary.today_meals)})"))
    else:
        console.print(Panel(f"[dim]{tr.t('no_meals_today')}[/dim]", title=tr.t("meals_today")))

    if summary.latest_mood:
        console.print(Panel(
            f"{summary.mood_emoji} {tr.mood(summary.latest_mood.amount)}",
            title=tr.t("current_mood"), border_style="magenta",
        ))
    else:
        console.print(Panel(f"[dim]{tr.t('no_mood_yet')}[/dim]", title=tr.t("current_mood")))


@app.command()
def timeline(
    days: Optional[int] = typer.Option(None, help="Window size; defaults to REMISSIO_TIMELINE_DAYS."),
) -> None:
    """Day-by-day history with averages."""
    factory = _make_factory()
    user, tr = _signed_in(factory)
    try:
        result = factory.create_timeline_service().build(
            user, days if days is not None else factory.config.timeline_days,
        )
    except DomainError as exc:
        _fail(str(exc))

    t = Table(box=box.SIMPLE_HEAVY)
    t.add_column(tr.t("date"))
    t.add_column(tr.t("pucai"), justify="right")
    t.add_column(tr.t("mood"), justify="right")
    t.add_column(tr.t("meals"), justify="right")
    for p in result.points:
        t.add_row(
            p.date,
            _show(p.pucai),
            f"{mood_emoji(p.mood)} {p.mood}" if p.mood is not None else _show(None),
            str(p.meals),
        )
    console.print(Panel(t, title=tr.t("timeline_title", days=result.days), border_style="blue"))

    avg = result.averages
    console.print(tr.t(
        "timeline_averages",
        pucai=f"[bold]{_show(avg.avg_pucai)}[/bold]",
        mood=f"[bold]{_show(avg.avg_mood)}[/bold]",
        meals=f"[bold]{avg.total_meals}[/bold]",
        per_day=avg.avg_meals_per_day,
    ))


if __name__ == "__main__":
    app()
