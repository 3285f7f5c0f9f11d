"""Rule knowledge base.

Plain-language explanations for common axe-core rule IDs, and WCAG tag
formatting. Unknown rules return None; callers fall back to the
violation's own help/description text.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

MAX_WCAG_LABELS = 3

_WCAG_TAG_RE = re.compile(r"^wcag(\d)(\d)(\d+)$", re.IGNORECASE)


class RuleExplanation(NamedTuple):
    title: str
    explanation: str
    impact: str
    recommendation: str


RULE_EXPLANATIONS: Mapping[str, RuleExplanation] = MappingProxyType({
    "color-contrast": RuleExplanation(
        title="Insufficient Color Contrast",
        explanation=(
            "Text elements on the page do not have enough contrast against their background, "
            "making them difficult to read for users with low vision or color blindness."
        ),
        impact=(
            "Users with visual impairments may be unable to read content, leading to "
            "information loss and potential non-compliance."
        ),
        recommendation=(
            "Increase the contrast ratio between text and background colors to meet the WCAG AA "
            "minimum of 4.5:1 for normal text and 3:1 for large text."
        ),
    ),
    "image-alt": RuleExplanation(
        title="Images Missing Alternative Text",
        explanation=(
            "Images on the page lack descriptive alt text, making them invisible to screen "
            "reader users and search engines."
        ),
        impact=(
            "Blind and visually impaired users cannot understand the content or purpose of "
            "images. This also affects search rankings."
        ),
        recommendation=(
            'Add descriptive alt attributes to all meaningful images. Use an empty alt="" for '
            "decorative images."
        ),
    ),
    "label": RuleExplanation(
        title="Form Inputs Missing Labels",
        explanation=(
            "Form fields do not have associated labels, making it unclear what information "
            "users should enter."
        ),
        impact=(
            "Screen reader users cannot identify form fields. All users may struggle to "
            "understand what data is expected."
        ),
        recommendation=(
            "Associate a <label> element with each form input using the 'for' attribute "
            "matching the input's 'id'."
        ),
    ),
    "link-name": RuleExplanation(
        title="Links Without Accessible Names",
        explanation="Links on the page do not have discernible text that describes their destination or purpose.",
        impact=(
            "Screen reader users hear 'link' without context, making navigation impossible "
            "and the experience frustrating."
        ),
        recommendation="Ensure all links have descriptive text content, aria-label, or aria-labelledby attributes.",
    ),
    "button-name": RuleExplanation(
        title="Buttons Without Accessible Names",
        explanation="Interactive buttons lack text or labels that describe their action.",
        impact=(
            "Users relying on assistive technology cannot determine what a button does, "
            "preventing them from completing tasks."
        ),
        recommendation="Add visible text content, aria-label, or aria-labelledby to all button elements.",
    ),
    "html-has-lang": RuleExplanation(
        title="Page Missing Language Declaration",
        explanation=(
            "The HTML document does not declare its primary language, preventing assistive "
            "technologies from using correct pronunciation."
        ),
        impact="Screen readers may mispronounce content, making the page difficult to understand for blind users.",
        recommendation='Add a lang attribute to the <html> element (e.g., lang="en" for English).',
    ),
    "document-title": RuleExplanation(
        title="Page Missing Title",
        explanation="The page does not have a <title> element, making it difficult to identify in browser tabs and bookmarks.",
        impact=(
            "Users cannot identify the page purpose from their browser tab. Screen reader "
            "users lose important context about the current page."
        ),
        recommendation="Add a descriptive <title> element to the <head> of the document.",
    ),
    "heading-order": RuleExplanation(
        title="Incorrect Heading Hierarchy",
        explanation=(
            "Headings on the page skip levels (e.g., jumping from h1 to h3), breaking the "
            "document's logical structure."
        ),
        impact=(
            "Screen reader users who navigate by headings will miss content sections. The "
            "page structure becomes confusing."
        ),
        recommendation="Ensure headings follow a logical order without skipping levels (h1, then h2, then h3).",
    ),
    "landmark-one-main": RuleExplanation(
        title="Missing Main Landmark",
        explanation=(
            "The page does not have a <main> landmark region, making it difficult for "
            "assistive technology users to find primary content."
        ),
        impact=(
            "Screen reader users cannot jump to the main content area and must move through "
            "every preceding element."
        ),
        recommendation='Wrap the primary content area in a <main> element or add role="main" to the appropriate container.',
    ),
    "region": RuleExplanation(
        title="Content Outside Landmarks",
        explanation="Some page content exists outside of defined landmark regions (header, nav, main, footer).",
        impact="Assistive technology users may miss content that falls outside navigable landmark regions.",
        recommendation="Ensure all visible content is contained within appropriate landmark regions.",
    ),
    "aria-required-attr": RuleExplanation(
        title="ARIA Roles Missing Required Attributes",
        explanation="Elements with ARIA roles are missing attributes that the role requires.",
        impact="Assistive technologies receive incomplete information and may announce controls incorrectly.",
        recommendation="Add every attribute required by the element's ARIA role, or use a native HTML element instead.",
    ),
    "aria-valid-attr-value": RuleExplanation(
        title="Invalid ARIA Attribute Values",
        explanation="ARIA attributes on the page contain values that are not allowed for that attribute.",
        impact="Screen readers may ignore or misreport the state of affected controls.",
        recommendation="Correct each ARIA attribute so that its value is one of the values permitted by the specification.",
    ),
    "duplicate-id-aria": RuleExplanation(
        title="Duplicate IDs Referenced by ARIA",
        explanation="Several elements share an id that is referenced from ARIA or label relationships.",
        impact="Labels and descriptions may be attached to the wrong element, confusing assistive technology users.",
        recommendation="Give every element referenced by ARIA or a label a unique id.",
    ),
    "frame-title": RuleExplanation(
        title="Frames Without Titles",
        explanation="Inline frames on the page have no title describing their content.",
        impact="Screen reader users cannot tell what an embedded frame contains before entering it.",
        recommendation="Add a short, descriptive title attribute to every <iframe> and <frame> element.",
    ),
    "list": RuleExplanation(
        title="Incorrectly Structured Lists",
        explanation="List elements contain children other than list items, scripts or templates.",
        impact="Screen readers may announce the wrong number of items or fail to recognise the list.",
        recommendation="Ensure <ul> and <ol> elements contain only <li>, <script> or <template> children.",
    ),
    "listitem": RuleExplanation(
        title="List Items Outside a List",
        explanation="<li> elements appear outside of a <ul> or <ol> parent.",
        impact="Assistive technologies cannot convey the grouping and count of related items.",
        recommendation="Wrap list items in a <ul> or <ol> element.",
    ),
    "meta-viewport": RuleExplanation(
        title="Zooming Disabled",
        explanation="The viewport meta tag prevents users from zooming or scaling the page.",
        impact="Users with low vision cannot enlarge text and content to a readable size.",
        recommendation="Remove user-scalable=no and any maximum-scale below 5 from the viewport meta tag.",
    ),
    "select-name": RuleExplanation(
        title="Select Menus Without Labels",
        explanation="Drop-down select elements have no accessible name.",
        impact="Screen reader users cannot tell what a drop-down is for before choosing an option.",
        recommendation="Associate a visible <label> with every <select> element.",
    ),
    "target-size": RuleExplanation(
        title="Touch Targets Too Small",
        explanation="Interactive targets are smaller than 24 by 24 CSS pixels and too close to neighbouring targets.",
        impact="Users with limited dexterity or on touch screens may activate the wrong control.",
        recommendation="Increase the size or spacing of interactive targets to at least 24 by 24 CSS pixels.",
    ),
    "bypass": RuleExplanation(
        title="No Way to Skip Repeated Content",
        explanation="The page offers no skip link, heading or landmark to bypass repeated navigation blocks.",
        impact="Keyboard and screen reader users must tab through the full navigation on every page.",
        recommendation="Add a skip-to-content link and structure the page with landmarks and headings.",
    ),
})


def get_rule_explanation(rule_id: str) -> Optional[RuleExplanation]:
    """Look up the explanation for an axe rule ID. Never raises."""
    if not isinstance(rule_id, str):
        return None
    return RULE_EXPLANATIONS.get(rule_id)


def format_wcag_tag(tag: str) -> Optional[str]:
    """Format an axe WCAG tag as a criterion label (``wcag143`` -> ``1.4.3``)."""
    m = _WCAG_TAG_RE.match(tag.strip())
    if not m:
        return None
    return f"{m.group(1)}.{m.group(2)}.{m.group(3)}"


def extract_wcag_criteria(tags: list[str], limit: int = MAX_WCAG_LABELS) -> list[str]:
    """Return up to ``limit`` distinct WCAG criterion labels from a tag list."""
    labels: list[str] = []
    for tag in tags or []:
        if not isinstance(tag, str):
            continue
        label = format_wcag_tag(tag)
        if label and label not in labels:
            labels.append(label)
        if len(labels) >= limit:
            break
    return labels
