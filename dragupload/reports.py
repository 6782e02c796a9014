# ##### BEGIN GPL LICENSE BLOCK #####
#
#  This program is free software; you can redistribute it and/or
#  modify it under the terms of the GNU General Public License
#  as published by the Free Software Foundation; either version 2
#  of the License, or (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software Foundation,
#  Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
#
# ##### END GPL LICENSE BLOCK #####

from inspect import getframeinfo, stack
from logging import getLogger
from os.path import basename
from time import time
from typing import Optional, Protocol

from . import global_vars
from .tasks import BatchResult


logger = getLogger(__name__)
reports = []


class Notifier(Protocol):
    def notify(self, text: str, type: str = "INFO") -> None: ...

    def whisper(self, text: str) -> None:
        """Deliver text privately to the user who made the drop."""


class Report:
    def __init__(self, text="", timeout=5, type="INFO"):
        self.text = text
        self.timeout = timeout
        self.type = type
        self.start_time = time()

    @property
    def age(self) -> float:
        return time() - self.start_time

    @property
    def expired(self) -> bool:
        return self.age > self.timeout


def add_report(
    text="", timeout=5, type="INFO", details="", notifier: Optional[Notifier] = None
) -> Report:
    """Add text report for the user. Same reports are merged and just made longer by the timeout.
    The notifier is called for every report, merged or not. Also log the text and details into the console.
    """
    text = text.strip()
    full_message = text
    details = details.strip()
    if details != "":
        full_message = f"{text} {details}"

    if type == "ERROR":
        caller = getframeinfo(stack()[1][0])
        logger.error(f"{full_message} [{basename(caller.filename)}:{caller.lineno}]")
    elif type == "WARNING":
        logger.warning(full_message)
    else:
        logger.info(full_message)

    if notifier is not None:
        notifier.notify(text, type)

    remove_expired()
    for old_report in reports:
        if old_report.text == text and old_report.type == type:
            old_report.timeout = old_report.age + timeout
            return old_report

    report = Report(text=text, timeout=timeout, type=type)
    reports.append(report)
    return report


def remove_expired():
    reports[:] = [r for r in reports if not r.expired]


def document_link(document_type: str, document_id: str, name: str) -> str:
    """Content link the host renders as a clickable reference to the document."""
    return f"@{document_type}[{document_id}]{{{name}}}"


def build_batch_summary(batch: BatchResult) -> str:
    created = batch.created()
    failed = batch.failed()
    if not created:
        text = f"Drag Upload: nothing imported from {len(batch)} dropped item(s)."
    else:
        lines = [f"Drag Upload: imported {len(created)} of {len(batch)} item(s):"]
        for task in created:
            document_type = global_vars.FOLDER_TYPES.get(task.result.get("kind"), "Actor")
            link = document_link(document_type, task.document_id, task.result.get("name", ""))
            lines.append(f"- {task.item.original_filename}: {link}")
        text = "\n".join(lines)
    if failed:
        names = ", ".join(t.item.original_filename for t in failed)
        text += f"\nFailed: {names}"
    return text


def send_batch_summary(batch: BatchResult, notifier: Optional[Notifier] = None) -> str:
    """Build one summary for the whole batch and whisper it to the user."""
    text = build_batch_summary(batch)
    logger.info(text)
    if notifier is not None:
        notifier.whisper(text)
    return text
