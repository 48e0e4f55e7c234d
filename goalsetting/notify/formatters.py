"""Digest text formatters."""

from dataclasses import dataclass
from datetime import date
from html import escape
from typing import List

from goalsetting.db.models import Task
from goalsetting.utils.constants import DEFAULT_APP_URL, PRIORITY_COLORS
from goalsetting.utils.time_utils import format_due_date, format_relative_due


@dataclass(frozen=True)
class Digest:
    """A rendered reminder digest."""

    subject: str
    text: str
    html: str


def format_subject(count: int, is_morning: bool) -> str:
    if is_morning:
        return f"☀️ Morning Reminder: {count} task(s) awaiting you"
    return f"🌙 Evening Recap: {count} task(s) still pending"


def format_intro(count: int, is_morning: bool) -> str:
    if is_morning:
        return f"Here's your morning overview of {count} task(s) to focus on today:"
    return f"Here's your evening recap of {count} task(s) still pending:"


def is_overdue(task: Task, today: date) -> bool:
    return task.due_date is not None and task.due_date < today


def format_task_line(task: Task, today: date) -> str:
    """Format one task as a plain-text bullet."""
    lines = [f"• {task.title} [{task.priority.title()} Priority]"]

    if task.due_date is not None:
        due = f"{format_due_date(task.due_date)} ({format_relative_due(task.due_date, today)})"
    else:
        due = format_due_date(None)
    lines.append(f"   📅 Due: {due}")

    if task.recurrence != "none":
        lines.append(f"   🔁 Repeats {task.recurrence}")

    if task.description:
        lines.append(f"   {task.description}")

    return "\n".join(lines)


def format_task_html(task: Task, today: date) -> str:
    """Format one task as an HTML block; user text is escaped."""
    color = PRIORITY_COLORS.get(task.priority, PRIORITY_COLORS["medium"])
    overdue = is_overdue(task, today)
    due_color = "#ef4444" if overdue else "#6b7280"
    due_text = escape(format_due_date(task.due_date))
    if overdue:
        due_text += " (Overdue)"

    description = escape(task.description) if task.description else "No description provided"

    return (
        '<div style="border-left: 4px solid {color}; padding: 8px 12px; margin: 8px 0;">'
        '<strong>{title}</strong><br>'
        '<span style="color: #4b5563;">{description}</span><br>'
        '<span style="color: {color}; font-weight: bold;">● {priority} Priority</span> '
        '<span style="color: {due_color};">📅 {due}</span>'
        "</div>"
    ).format(
        color=color,
        title=escape(task.title),
        description=description,
        priority=task.priority.title(),
        due_color=due_color,
        due=due_text,
    )


def format_digest(
    name: str,
    tasks: List[Task],
    is_morning: bool,
    today: date,
    app_url: str = DEFAULT_APP_URL,
) -> Digest:
    """Render a morning or evening digest for one user."""
    count = len(tasks)
    greeting = "☀️ Good Morning!" if is_morning else "🌙 Good Evening!"
    intro = format_intro(count, is_morning)
    closing = (
        "Have a productive day! 💪"
        if is_morning
        else "Rest well and tackle these tomorrow! 🌟"
    )

    text_lines = [f"{greeting} {name},", "", intro, ""]
    text_lines.extend(format_task_line(task, today) for task in tasks)
    text_lines.extend(["", closing, "", f"Open your goals: {app_url}"])

    task_html = "\n".join(format_task_html(task, today) for task in tasks)
    html = (
        "<html><body>"
        f"<h2>{greeting}</h2>"
        f"<p>Hi {escape(name)},</p>"
        f"<p>{escape(intro)}</p>"
        f"{task_html}"
        f"<p>{closing}</p>"
        f'<p><a href="{escape(app_url, quote=True)}">Open your goals</a></p>'
        "</body></html>"
    )

    return Digest(
        subject=format_subject(count, is_morning),
        text="\n".join(text_lines),
        html=html,
    )
