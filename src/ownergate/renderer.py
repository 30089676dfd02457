from __future__ import annotations

import logging
from typing import Callable

from ownergate.exceptions import HostServiceError
from ownergate.host import ExtensionPoint
from ownergate.internal_config import EXTENSION_POINT_ID
from ownergate.models import LabelNode, OwnershipStatus
from ownergate.variants import GateVariant

logger: logging.Logger = logging.getLogger(__name__)

LABEL_TEMPLATE = '<span class="{style}">{text}</span>'


class AnnotationRenderer(object):
    """Show the resolved ownership status in the change screen.

    At most one label is on screen per renderer: a new render replaces the
    node inserted by the previous one.
    """

    def __init__(
        self,
        extension_point: Callable[[str], ExtensionPoint | None],
        html: Callable[..., str],
        css: Callable[[str], str],
        hide_submit_control: Callable[[], bool] | None = None,
        container_id: str = EXTENSION_POINT_ID,
    ) -> None:
        self.extension_point = extension_point
        self.html = html
        self.css = css
        self.hide_submit_control = hide_submit_control
        self.container_id = container_id
        self.current_node: LabelNode | None = None
        self._container: ExtensionPoint | None = None

    def render(self, status: OwnershipStatus, variant: GateVariant) -> LabelNode:
        if status is OwnershipStatus.APPROVED:
            style = self.css(f"color: {variant.approved_color};")
            text = variant.approved_text
        elif status is OwnershipStatus.DENIED:
            style = self.css(f"color: {variant.denied_color};")
            text = variant.denied_text
        else:
            raise ValueError(f"Cannot render a label for {status.value} status")

        # the submit control lives outside the extension point
        if status is OwnershipStatus.DENIED and variant.hide_submit_control:
            self._hide_submit()

        container = self.extension_point(self.container_id)
        if container is None:
            raise HostServiceError(f"Extension point '{self.container_id}' not found")

        node = LabelNode(
            html=variant.label_prefix
            + self.html(LABEL_TEMPLATE, style=style, text=text),
            css_class=style,
            text=text,
            variant_name=variant.name,
        )
        self.clear()
        container.append(node)
        self.current_node = node
        self._container = container
        return node

    def clear(self) -> None:
        if self.current_node is None or self._container is None:
            return
        self._container.remove(self.current_node)
        self.current_node = None
        self._container = None

    def _hide_submit(self) -> None:
        if self.hide_submit_control is None:
            return
        if self.hide_submit_control():
            logger.info("Hiding submit button because not module owner")
