# app/content/templates.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class ContentType(str, Enum):
    BLOG = "blog"
    MARKETING = "marketing"
    SOCIAL_MEDIA = "social-media"


CONTENT_TYPES: frozenset[str] = frozenset(t.value for t in ContentType)


@dataclass(frozen=True)
class Template:
    id: str
    name: str
    description: str
    content_type: ContentType
    prompt: str
    placeholders: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "contentType": self.content_type.value,
            "prompt": self.prompt,
            "placeholders": list(self.placeholders),
        }


TEMPLATES: tuple[Template, ...] = (
    # Blog
    Template(
        "blog-how-to", "How-To Guide", "Step-by-step tutorial on a specific topic", ContentType.BLOG,
        "Write a comprehensive how-to guide about {topic}. Include an engaging introduction, clear "
        "step-by-step instructions, helpful tips, and a conclusion. Make it informative and easy to follow.",
        ("topic",),
    ),
    Template(
        "blog-listicle", "Listicle", "Numbered list article with detailed points", ContentType.BLOG,
        'Write an engaging listicle titled "{title}". Create {number} well-detailed points with '
        "explanations for each. Include an introduction and conclusion.",
        ("title", "number"),
    ),
    Template(
        "blog-opinion", "Opinion Piece", "Share your perspective on a topic", ContentType.BLOG,
        "Write an opinion piece about {topic}. Present a clear viewpoint with supporting arguments, "
        "examples, and a persuasive conclusion.",
        ("topic",),
    ),
    Template(
        "blog-news", "News Article", "Informative news-style article", ContentType.BLOG,
        "Write a news-style article about {topic}. Include key facts, quotes, context, and maintain "
        "an objective tone throughout.",
        ("topic",),
    ),

    # Marketing
    Template(
        "marketing-email", "Email Campaign", "Promotional email for your audience", ContentType.MARKETING,
        "Write a compelling marketing email for {product/service} targeting {audience}. Include an "
        "attention-grabbing subject line, engaging body copy, clear benefits, and a strong call-to-action.",
        ("product/service", "audience"),
    ),
    Template(
        "marketing-landing", "Landing Page Copy", "Conversion-focused landing page content", ContentType.MARKETING,
        "Create landing page copy for {product/service}. Include a compelling headline, subheadline, key "
        "benefits, features, social proof section, and multiple CTAs. Focus on conversion optimization.",
        ("product/service",),
    ),
    Template(
        "marketing-product", "Product Description", "Engaging product description for e-commerce",
        ContentType.MARKETING,
        "Write a compelling product description for {product}. Highlight key features, benefits, "
        "specifications, and include persuasive language that encourages purchase.",
        ("product",),
    ),
    Template(
        "marketing-ad", "Ad Copy", "Short ad copy for various platforms", ContentType.MARKETING,
        "Create short, punchy ad copy for {product/service} targeting {audience}. Write 3 variations with "
        "different angles, each under 100 words, with compelling headlines and clear CTAs.",
        ("product/service", "audience"),
    ),

    # Social media
    Template(
        "social-announcement", "Product Launch", "Announcement post for new products/features",
        ContentType.SOCIAL_MEDIA,
        "Create an exciting product launch announcement for {product}. Write 3 variations suitable for "
        "different platforms (Twitter, LinkedIn, Instagram). Include relevant hashtags and emojis.",
        ("product",),
    ),
    Template(
        "social-engagement", "Engagement Post", "Interactive content to boost engagement", ContentType.SOCIAL_MEDIA,
        "Create engaging social media posts about {topic} that encourage audience interaction. Include "
        "questions, polls ideas, or conversation starters. Write for {platform}.",
        ("topic", "platform"),
    ),
    Template(
        "social-educational", "Educational Content", "Quick tips and informative posts", ContentType.SOCIAL_MEDIA,
        "Create educational social media content about {topic}. Write bite-sized tips, facts, or insights "
        "in an engaging format. Suitable for carousel posts or thread format.",
        ("topic",),
    ),
    Template(
        "social-story", "Story/Behind-the-Scenes", "Authentic storytelling content", ContentType.SOCIAL_MEDIA,
        "Write authentic behind-the-scenes or story content about {topic}. Make it personal, relatable, "
        "and engaging. Include suggestions for visual elements.",
        ("topic",),
    ),
    Template(
        "social-caption", "Instagram Caption", "Compelling Instagram captions", ContentType.SOCIAL_MEDIA,
        "Write 3 different Instagram captions for a post about {topic}. Include one short and punchy, one "
        "storytelling-style, and one with a question. Add relevant hashtags for each.",
        ("topic",),
    ),
    Template(
        "social-thread", "Twitter/X Thread", "Multi-tweet thread on a topic", ContentType.SOCIAL_MEDIA,
        "Create a Twitter/X thread about {topic}. Write 5-7 tweets that flow together, starting with a hook "
        "and ending with a call-to-action. Keep each tweet under 280 characters.",
        ("topic",),
    ),
)

_BY_ID: dict[str, Template] = {t.id: t for t in TEMPLATES}


def get_template(template_id: str) -> Optional[Template]:
    return _BY_ID.get(template_id)


def templates_by_type(content_type: Optional[str] = None) -> list[Template]:
    if not content_type:
        return list(TEMPLATES)
    return [t for t in TEMPLATES if t.content_type.value == content_type]


def fill_template(template: Template, inputs: Optional[Mapping[str, Any]]) -> str:
    """
    Substitute {placeholder} markers with the caller's inputs.

    Missing, null and empty values become "" rather than an error; callers
    that want stricter behavior must validate inputs first.
    """
    inputs = inputs or {}
    prompt = template.prompt
    for name in template.placeholders:
        value = inputs.get(name)
        prompt = prompt.replace("{" + name + "}", "" if value is None else str(value))
    return prompt
