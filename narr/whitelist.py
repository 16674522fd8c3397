"""Tags, attributes and URI schemes that sanitized HTML may keep."""

from __future__ import annotations

ALLOWED_TAGS = frozenset(
    """
    a abbr acronym address area article aside audio b bdi bdo big blink blockquote body br
    button canvas caption center cite code col colgroup content data datalist dd decorator
    del details dfn dialog dir div dl dt element em fieldset figcaption figure font footer
    form h1 h2 h3 h4 h5 h6 head header hgroup hr html i iframe img input ins kbd label
    legend li main map mark marquee menu menuitem meter nav nobr ol optgroup option output
    p picture pre progress q rp rt ruby s samp section select shadow small source spacer
    span strike strong sub summary sup table tbody td template textarea tfoot th thead
    time tr track tt u ul var video wbr
    """.split()
)

ALLOWED_SVG_TAGS = frozenset(
    """
    svg a altglyph altglyphdef altglyphitem animatecolor animatemotion animatetransform
    circle clippath defs desc ellipse filter font g glyph glyphref hkern image line
    lineargradient marker mask metadata mpath path pattern polygon polyline radialgradient
    rect stop switch symbol text textpath title tref tspan view vkern
    """.split()
)

ALLOWED_SVG_FILTERS = frozenset(
    """
    feBlend feColorMatrix feComponentTransfer feComposite feConvolveMatrix
    feDiffuseLighting feDisplacementMap feDistantLight feFlood feFuncA feFuncB feFuncG
    feFuncR feGaussianBlur feMerge feMergeNode feMorphology feOffset fePointLight
    feSpecularLighting feSpotLight feTile feTurbulence
    """.split()
)

ALLOWED_ATTRS = {
    "img": frozenset({"alt", "title", "src", "srcset", "sizes"}),
    "audio": frozenset({"src"}),
    "video": frozenset({"poster", "height", "width", "src"}),
    "source": frozenset({"src", "type", "srcset", "sizes", "media"}),
    "td": frozenset({"rowspan", "colspan"}),
    "th": frozenset({"rowspan", "colspan"}),
    "q": frozenset({"cite"}),
    "a": frozenset({"href", "title"}),
    "time": frozenset({"datetime"}),
    "abbr": frozenset({"title"}),
    "acronym": frozenset({"title"}),
    "iframe": frozenset({"width", "height", "frameborder", "src", "allowfullscreen"}),
}

ALLOWED_SVG_ATTRS = frozenset(
    """
    accent-height accumulate additive alignment-baseline ascent attributename attributetype
    azimuth basefrequency baseline-shift begin bias by class clip clippathunits clip-path
    clip-rule color color-interpolation color-interpolation-filters color-profile
    color-rendering cx cy d dx dy diffuseconstant direction display divisor dur edgemode
    elevation end fill fill-opacity fill-rule filter filterunits flood-color flood-opacity
    font-family font-size font-size-adjust font-stretch font-style font-variant font-weight
    fx fy g1 g2 glyph-name glyphref gradientunits gradienttransform height href id
    image-rendering in in2 k k1 k2 k3 k4 kerning keypoints keysplines keytimes lang
    lengthadjust letter-spacing kernelmatrix kernelunitlength lighting-color local
    marker-end marker-mid marker-start markerheight markerunits markerwidth
    maskcontentunits maskunits max mask media method mode min name numoctaves offset
    operator opacity order orient orientation origin overflow paint-order path pathlength
    patterncontentunits patterntransform patternunits points preservealpha
    preserveaspectratio primitiveunits r rx ry radius refx refy repeatcount repeatdur
    restart result rotate scale seed shape-rendering specularconstant specularexponent
    spreadmethod startoffset stddeviation stitchtiles stop-color stop-opacity
    stroke-dasharray stroke-dashoffset stroke-linecap stroke-linejoin stroke-miterlimit
    stroke-opacity stroke stroke-width surfacescale systemlanguage tabindex targetx targety
    transform text-anchor text-decoration text-rendering textlength type u1 u2 unicode
    values viewbox visibility version vert-adv-y vert-origin-x vert-origin-y width
    word-spacing wrap writing-mode xchannelselector ychannelselector x x1 x2 xmlns y y1 y2
    z zoomandpan
    """.split()
)

ALLOWED_URI_SCHEMES = frozenset(
    {"http", "https", "ftp", "ftps", "tel", "mailto", "callto", "cid", "xmpp"}
)


def is_valid_tag(tag_name: str) -> bool:
    """Whether an element may appear in sanitized output."""
    return (
        tag_name in ALLOWED_TAGS
        or tag_name in ALLOWED_SVG_TAGS
        or tag_name in ALLOWED_SVG_FILTERS
    )


def is_valid_attribute(tag_name: str, attribute_name: str) -> bool:
    """Whether an attribute may be kept on the given element."""
    allowed = ALLOWED_ATTRS.get(tag_name)
    if allowed is not None:
        return attribute_name in allowed
    if tag_name in ALLOWED_SVG_TAGS:
        return attribute_name in ALLOWED_SVG_ATTRS
    return False


def has_valid_uri_scheme(src: str) -> bool:
    """Whether a URL uses one of the permitted schemes."""
    return src.split(":", 1)[0] in ALLOWED_URI_SCHEMES