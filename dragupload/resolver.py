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

"""Resolution of a single dropped item into a name and a document kind, with a human in the loop."""

import enum
from logging import getLogger
from typing import Optional, Protocol, Sequence

from . import global_vars, utils
from .catalog import find_best_match
from .datas import Create, DroppedItem, ResolutionRequest, ResolutionResult, Skip


logger = getLogger(__name__)


class Prompt(Protocol):
    async def ask(self, request: ResolutionRequest) -> Optional[ResolutionResult]:
        """Ask the user what to do with the item. None means the prompt was dismissed."""


class ResolverState(enum.Enum):
    PENDING = "pending"
    AWAITING_HUMAN = "awaiting_human"
    RESOLVED = "resolved"


class ImportResolver:
    def __init__(
        self,
        item: DroppedItem,
        index: int,
        batch_size: int,
        catalog: Sequence[str],
        title_case: bool = False,
    ):
        self.item = item
        self.index = index
        self.batch_size = batch_size
        self.catalog = tuple(catalog)
        self.title_case = title_case
        self.state = ResolverState.PENDING
        self.result: Optional[ResolutionResult] = None

    def build_request(self) -> ResolutionRequest:
        label = utils.derive_label(self.item.original_filename, self.title_case)
        return ResolutionRequest(
            item=self.item,
            suggested_name=label,
            matched_catalog_name=find_best_match(label, self.catalog),
            sequence_index=self.index,
            batch_size=self.batch_size,
            catalog=self.catalog,
        )

    async def resolve(self, prompt: Prompt) -> ResolutionResult:
        """Run the item through the prompt. Never raises, prompt failures resolve as Skip."""
        request = self.build_request()
        self.state = ResolverState.AWAITING_HUMAN
        try:
            answer = await prompt.ask(request)
        except Exception as e:
            logger.error(f"Prompt for {self.item.original_filename} failed: {e!r}")
            return self._resolved(Skip(reason="prompt failed"))

        if answer is None:
            return self._resolved(Skip(reason="dismissed"))
        if isinstance(answer, Skip):
            return self._resolved(answer)

        if answer.kind not in global_vars.KINDS:
            logger.warning(f"Unknown document kind {answer.kind!r}, skipping {self.item.original_filename}")
            return self._resolved(Skip(reason=f"unknown kind {answer.kind}"))
        final_name = answer.final_name.strip() or request.initial_name
        return self._resolved(Create(kind=answer.kind, final_name=final_name))

    def _resolved(self, result: ResolutionResult) -> ResolutionResult:
        self.state = ResolverState.RESOLVED
        self.result = result
        logger.debug(f"{self.item.original_filename} resolved as {result}")
        return result
