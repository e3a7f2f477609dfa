"""
Blocs de base pour block_views.

Chaque type de bloc = attributs typés (BlockAttributes) + contrôleur qui
résout ces attributs en ResolvedBlock. La vue (renderer/html.py) compose
ensuite le markup à partir du ResolvedBlock.
"""
from typing import Any, Callable, Dict, Iterable, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.context import RenderContext
from ..core.i18n import translate
from ..core.icons import IconLibrary
from ..core.interactivity import Store, context_attribute
from ..core.schemas import BlockNode
from ..core.settings import Settings
from ..core.styles import render_attributes, wrapper_attributes

# Directives de couleur partagées par la plupart des blocs
COLOR_KEYS = (
    "textColor",
    "textColorHover",
    "backgroundColor",
    "backgroundColorHover",
    "backgroundGradient",
    "backgroundGradientHover",
)


class BlockAttributes(BaseModel):
    """
    Attributs d'un bloc, clés camelCase côté hôte.
    Les attributs non déclarés sont conservés (extra="allow").
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    anchor: Optional[str] = None
    class_name: Optional[str] = None

    def raw(self) -> Dict[str, Any]:
        """Attributs camelCase, champs déclarés + extras."""
        return self.model_dump(by_alias=True)


class ResolvedBlock(BaseModel):
    """Sortie d'un contrôleur : tout ce dont la vue a besoin."""
    tag: str = "div"
    wrapper: Dict[str, Any] = Field(default_factory=dict)
    data: Dict[str, Any] = Field(default_factory=dict)
    context: Optional[Dict[str, Any]] = None
    store: Optional[str] = None

    def context_attribute(self) -> str:
        if self.context is None or not self.store:
            return ""
        return context_attribute(self.store, self.context)

    def attributes(self) -> str:
        """Attributs HTML du wrapper + contexte client."""
        return render_attributes(self.wrapper) + self.context_attribute()


class BlockScope:
    """
    Ce qu'un contrôleur peut lire pendant une passe de rendu :
    le nœud, le contexte ancêtre, le markup des enfants et les services.
    """

    def __init__(
        self,
        node: BlockNode,
        context: RenderContext,
        content: str,
        settings: Settings,
        icons: IconLibrary,
        unique_id: Callable[[str], str],
        lang: Optional[str] = None,
    ):
        self.node      = node
        self.context   = context
        self.content   = content
        self.settings  = settings
        self.icons     = icons
        self.unique_id = unique_id
        self.lang      = lang or settings.lang

    @property
    def prefix(self) -> str:
        return self.settings.prefix

    @property
    def block_class(self) -> str:
        return f"wp-block-{self.prefix}-{self.node.name}"

    def store(self, name: str) -> Store:
        return Store(self.settings.namespace, name)

    def wrapper(
        self,
        attrs: BlockAttributes,
        configs: Iterable[Any] = (),
        extra: Optional[Dict[str, Any]] = None,
        custom_classes: Iterable[str] = (),
        custom_style: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return wrapper_attributes(
            attrs.raw(),
            configs,
            extra=extra,
            custom_classes=custom_classes,
            custom_style=custom_style,
            block_class=self.block_class,
            prefix=self.prefix,
        )

    def translate(self, key: str, **values) -> str:
        return translate(key, self.lang, **values)


Controller = Callable[[Any, BlockScope], Optional[ResolvedBlock]]
Provider   = Callable[[Any, BlockNode], Dict[str, Any]]
Preparer   = Callable[[Any, BlockNode], BlockNode]


class BlockType(BaseModel):
    """Entrée du registry : nom + modèle d'attributs + contrôleur."""
    model_config = ConfigDict(frozen=True)

    name: str
    attributes: Type[BlockAttributes] = BlockAttributes
    controller: Controller
    provide: Optional[Provider] = None
    prepare: Optional[Preparer] = None
    description: str = ""


def pick(attrs: BlockAttributes, *keys: str) -> Dict[str, Any]:
    """Sous-ensemble camelCase des attributs, exposé aux descendants."""
    raw = attrs.raw()
    return {key: raw.get(key) for key in keys}


def rotation_transform(rotation: Any) -> str:
    return f"rotate({rotation}deg)" if rotation not in (None, "", 0, "0") else ""
