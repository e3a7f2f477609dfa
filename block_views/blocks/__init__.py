"""
Blocs — exports publics + registry nom → BlockType.
"""
from typing import Dict

from .base import BlockAttributes, BlockScope, BlockType, ResolvedBlock
from .accordion import (
    ACCORDION_BLOCKS,
    AccordionAttributes, AccordionItemAttributes, AccordionHeaderAttributes,
    AccordionHeaderIconAttributes, AccordionHeaderContentAttributes, AccordionDetailsAttributes,
)
from .list import LIST_BLOCKS, ListAttributes, ListItemAttributes, ListIconAttributes
from .counter import (
    COUNTER_BLOCKS,
    CounterAttributes, CounterWrapperAttributes, CounterNumberAttributes, CounterProgressBarAttributes,
)
from .tabs import TABS_BLOCKS, TabsAttributes, TabWrapperAttributes, TabButtonAttributes, TabPanelAttributes
from .buttons import BUTTON_BLOCKS, ButtonsAttributes, ButtonAttributes
from .icon import ICON_BLOCKS, IconAttributes
from .separator import SEPARATOR_BLOCKS, SeparatorAttributes
from .google_map import GOOGLE_MAP_BLOCKS, GoogleMapAttributes
from .modal import (
    MODAL_BLOCKS,
    ModalAttributes, ModalTriggerAttributes, ModalTriggerButtonAttributes, ModalTriggerContentAttributes,
    ModalTriggerIconAttributes, ModalPopupAttributes, ModalCloseIconAttributes, ModalPopupContentAttributes,
)
from .countdown import (
    COUNTDOWN_BLOCKS,
    CountdownAttributes, CountdownUnitAttributes, CountdownNumberAttributes,
    CountdownLabelAttributes, CountdownSeparatorAttributes,
)

BLOCK_REGISTRY: Dict[str, BlockType] = {
    block.name: block
    for block in (
        *ACCORDION_BLOCKS,
        *LIST_BLOCKS,
        *COUNTER_BLOCKS,
        *TABS_BLOCKS,
        *BUTTON_BLOCKS,
        *ICON_BLOCKS,
        *SEPARATOR_BLOCKS,
        *GOOGLE_MAP_BLOCKS,
        *MODAL_BLOCKS,
        *COUNTDOWN_BLOCKS,
    )
}

# Attribut positionnel injecté par le renderer quand l'hôte ne le fournit pas :
# nom du bloc → (attribut, base de comptage)
POSITIONAL_ATTRIBUTES = {
    "list-child-item":       ("index", 1),
    "tabs-child-tab-button": ("currentTab", 0),
    "tabs-child-tabpanel":   ("currentTab", 0),
}

__all__ = [
    # Base
    "BlockAttributes", "BlockScope", "BlockType", "ResolvedBlock",
    # Accordion
    "AccordionAttributes", "AccordionItemAttributes", "AccordionHeaderAttributes",
    "AccordionHeaderIconAttributes", "AccordionHeaderContentAttributes", "AccordionDetailsAttributes",
    # List
    "ListAttributes", "ListItemAttributes", "ListIconAttributes",
    # Counter
    "CounterAttributes", "CounterWrapperAttributes", "CounterNumberAttributes", "CounterProgressBarAttributes",
    # Tabs
    "TabsAttributes", "TabWrapperAttributes", "TabButtonAttributes", "TabPanelAttributes",
    # Single blocks
    "ButtonsAttributes", "ButtonAttributes", "IconAttributes", "SeparatorAttributes", "GoogleMapAttributes",
    # Modal
    "ModalAttributes", "ModalTriggerAttributes", "ModalTriggerButtonAttributes", "ModalTriggerContentAttributes",
    "ModalTriggerIconAttributes", "ModalPopupAttributes", "ModalCloseIconAttributes", "ModalPopupContentAttributes",
    # Countdown
    "CountdownAttributes", "CountdownUnitAttributes", "CountdownNumberAttributes",
    "CountdownLabelAttributes", "CountdownSeparatorAttributes",
    # Registry
    "BLOCK_REGISTRY", "POSITIONAL_ATTRIBUTES",
]
