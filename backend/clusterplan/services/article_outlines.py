"""Outline templates for planned articles.

Each content type has a fixed outline shape:
- pillar: 6 H2 sections plus an FAQ block
- supporting: 3 sections
- long_tail: 3 short sections
- tutorial: 3 sections

Templates are filled with the target keyword (and audience where the
phrasing uses it). Word budgets per section roughly add up to the article's
word target.
"""

from clusterplan.models.content_cluster import ContentType
from clusterplan.schemas.content_cluster import (
    ArticleOutline,
    ArticleSection,
    CalloutBox,
    FAQItem,
    OutlineConclusion,
    OutlineIntroduction,
)


def _audience_context(target_audience: str | None) -> str:
    return f" for {target_audience}" if target_audience else ""


def pillar_outline(keyword: str, target_audience: str | None = None) -> ArticleOutline:
    """Comprehensive hub outline with FAQ."""
    audience = _audience_context(target_audience)

    return ArticleOutline(
        introduction=OutlineIntroduction(
            hook=f"Why is {keyword}{audience} becoming increasingly important?",
            problem_statement=(
                f"Many people struggle with {keyword} because they lack "
                "comprehensive understanding."
            ),
            value_proposition=(
                f"This complete guide will give you everything you need to "
                f"master {keyword}."
            ),
            preview=[
                f"What {keyword} is and why it matters",
                "Step-by-step implementation guide",
                "Common mistakes to avoid",
                "Advanced strategies and best practices",
                "Real-world examples and case studies",
            ],
        ),
        sections=[
            ArticleSection(
                heading=f"What is {keyword}?",
                description=f"Define {keyword} and provide comprehensive context",
                key_points=[
                    f"Clear definition of {keyword}",
                    "Key components and characteristics",
                    "Historical context and evolution",
                    "Current market trends",
                ],
                keywords=[keyword, "definition", "overview", "basics"],
                estimated_word_count=400,
                callout_boxes=[
                    CalloutBox(
                        type="tip",
                        title="Quick Definition",
                        content=f"{keyword} in one sentence.",
                        icon="lightbulb",
                    )
                ],
            ),
            ArticleSection(
                heading=f"Why {keyword} Matters{audience}",
                description="Explain the importance, benefits, and impact",
                key_points=[
                    "Key benefits and advantages",
                    "Industry impact and trends",
                    "ROI and business value",
                    "Future outlook and predictions",
                ],
                keywords=[keyword, "benefits", "importance", "value"],
                estimated_word_count=500,
                subsections=[
                    ArticleSection(
                        heading="Business Benefits",
                        level="h3",
                        description="How businesses benefit from implementing this",
                        key_points=[
                            "Cost savings",
                            "Efficiency gains",
                            "Competitive advantage",
                        ],
                        keywords=["business benefits", "ROI", "efficiency"],
                        estimated_word_count=200,
                    )
                ],
            ),
            ArticleSection(
                heading=f"How to Implement {keyword}",
                description="Step-by-step implementation guide",
                key_points=[
                    "Pre-implementation planning",
                    "Step-by-step process",
                    "Tools and resources needed",
                    "Timeline and milestones",
                ],
                keywords=[keyword, "implementation", "how to", "guide"],
                estimated_word_count=800,
                callout_boxes=[
                    CalloutBox(
                        type="warning",
                        title="Common Pitfall",
                        content=f"The most frequent mistake when rolling out {keyword}.",
                        icon="warning",
                    )
                ],
            ),
            ArticleSection(
                heading=f"Advanced {keyword} Strategies",
                description="Expert-level strategies and techniques",
                key_points=[
                    "Advanced techniques and methods",
                    "Industry-specific approaches",
                    "Scaling and optimization",
                    "Innovation and future trends",
                ],
                keywords=[keyword, "advanced", "strategies", "expert"],
                estimated_word_count=600,
            ),
            ArticleSection(
                heading=f"{keyword} Best Practices",
                description="Industry best practices and recommendations",
                key_points=[
                    "Do's and don'ts",
                    "Industry standards",
                    "Quality benchmarks",
                    "Continuous improvement",
                ],
                keywords=[keyword, "best practices", "recommendations", "standards"],
                estimated_word_count=500,
            ),
            ArticleSection(
                heading=f"Common {keyword} Mistakes to Avoid",
                description="Pitfalls and how to avoid them",
                key_points=[
                    "Most common mistakes",
                    "Why these mistakes happen",
                    "How to prevent them",
                    "Recovery strategies",
                ],
                keywords=[keyword, "mistakes", "avoid", "pitfalls"],
                estimated_word_count=400,
            ),
        ],
        conclusion=OutlineConclusion(
            summary=(
                f"{keyword} is a critical component that requires careful "
                "planning and execution."
            ),
            key_takeaways=[
                "Understand the fundamentals before implementation",
                "Follow the step-by-step process",
                "Avoid common mistakes",
                "Continuously optimize and improve",
            ],
            call_to_action=(
                f"Ready to implement {keyword}? Start with our comprehensive "
                "guide and take the first step today."
            ),
        ),
        faq_section=[
            FAQItem(
                question=f"What is the best way to get started with {keyword}?",
                answer=(
                    "Start by understanding the fundamentals and creating a "
                    "detailed implementation plan."
                ),
                keywords=["getting started", "beginner", "basics"],
            ),
            FAQItem(
                question=f"How long does it take to see results with {keyword}?",
                answer=(
                    "Results typically appear within 3-6 months with proper "
                    "implementation."
                ),
                keywords=["timeline", "results", "expectations"],
            ),
            FAQItem(
                question=f"What are the biggest challenges with {keyword}?",
                answer=(
                    "Common challenges include lack of planning, insufficient "
                    "resources, and poor execution."
                ),
                keywords=["challenges", "difficulties", "problems"],
            ),
        ],
    )


def supporting_outline(keyword: str) -> ArticleOutline:
    return ArticleOutline(
        introduction=OutlineIntroduction(
            hook=f"Looking to master {keyword}?",
            problem_statement=(
                f"Many people struggle with {keyword} because they don't know "
                "where to start."
            ),
            value_proposition=f"This guide shows you how to approach {keyword} effectively.",
            preview=[
                "Step-by-step process",
                "Common mistakes to avoid",
                "Pro tips and tricks",
            ],
        ),
        sections=[
            ArticleSection(
                heading=f"Getting Started with {keyword}",
                description="Foundation and prerequisites",
                key_points=["Prerequisites", "Setup requirements", "Initial steps"],
                keywords=[keyword, "getting started", "basics"],
                estimated_word_count=300,
            ),
            ArticleSection(
                heading=f"Step-by-Step {keyword} Process",
                description="Detailed implementation steps",
                key_points=["Step 1", "Step 2", "Step 3", "Step 4"],
                keywords=[keyword, "process", "steps", "how to"],
                estimated_word_count=600,
            ),
            ArticleSection(
                heading=f"Pro Tips for {keyword}",
                description="Advanced tips and optimization",
                key_points=[
                    "Advanced techniques",
                    "Optimization tips",
                    "Best practices",
                ],
                keywords=[keyword, "tips", "advanced", "optimization"],
                estimated_word_count=400,
            ),
        ],
        conclusion=OutlineConclusion(
            summary=f"Mastering {keyword} takes practice and patience.",
            key_takeaways=[
                "Follow the process",
                "Practice regularly",
                "Learn from mistakes",
            ],
            call_to_action=(
                f"Ready to start with {keyword}? Begin with step one and track "
                "your progress."
            ),
        ),
    )


def long_tail_outline(keyword: str) -> ArticleOutline:
    return ArticleOutline(
        introduction=OutlineIntroduction(
            hook=f"Quick answer: {keyword}",
            problem_statement=f"You're looking for a quick solution to {keyword}.",
            value_proposition=f"Here's exactly what you need to know about {keyword}.",
            preview=["Direct answer", "Key points", "Quick tips"],
        ),
        sections=[
            ArticleSection(
                heading=f"What You Need to Know About {keyword}",
                description="Essential information",
                key_points=["Definition", "Key facts", "Important considerations"],
                keywords=[keyword, "facts", "information"],
                estimated_word_count=400,
            ),
            ArticleSection(
                heading=f"Quick Tips for {keyword}",
                description="Actionable tips",
                key_points=["Tip 1", "Tip 2", "Tip 3"],
                keywords=[keyword, "tips", "quick"],
                estimated_word_count=300,
            ),
            ArticleSection(
                heading=f"Common Questions About {keyword}",
                description="Short answers to follow-up questions",
                key_points=["Question 1", "Question 2", "Question 3"],
                keywords=[keyword, "questions", "answers"],
                estimated_word_count=300,
            ),
        ],
        conclusion=OutlineConclusion(
            summary=f"{keyword} is simpler than you might think.",
            key_takeaways=["Key point 1", "Key point 2", "Key point 3"],
            call_to_action=(
                f"Need more help with {keyword}? Check out our detailed guides."
            ),
        ),
    )


def tutorial_outline(keyword: str) -> ArticleOutline:
    return ArticleOutline(
        introduction=OutlineIntroduction(
            hook=(
                f"Ready to master {keyword}? This tutorial walks you through "
                "every step."
            ),
            problem_statement=(
                f"Many people struggle with {keyword} because they lack proper "
                "guidance and step-by-step instructions."
            ),
            value_proposition=(
                f"This tutorial teaches {keyword} with practical examples and "
                "real-world applications."
            ),
            preview=[
                "Step-by-step instructions",
                "Practical examples",
                "Common pitfalls to avoid",
                "Advanced techniques",
            ],
        ),
        sections=[
            ArticleSection(
                heading="Getting Started",
                description=f"Understanding {keyword} is essential for success.",
                key_points=[
                    "Learn the fundamentals",
                    "Set up your environment",
                    "Understand prerequisites",
                ],
                keywords=[keyword, "basics", "fundamentals"],
                estimated_word_count=500,
            ),
            ArticleSection(
                heading="Step-by-Step Process",
                description=f"Follow this process to master {keyword}.",
                key_points=[
                    "Foundation building",
                    "Implementation phase",
                    "Optimization techniques",
                ],
                keywords=[keyword, "process", "implementation"],
                estimated_word_count=1000,
            ),
            ArticleSection(
                heading="Advanced Techniques",
                description="Master advanced concepts and avoid common pitfalls.",
                key_points=[
                    "Pro tips and tricks",
                    "Common mistakes to avoid",
                    "Expert-level techniques",
                ],
                keywords=[keyword, "advanced", "techniques"],
                estimated_word_count=500,
            ),
        ],
        conclusion=OutlineConclusion(
            summary=f"You've now covered the fundamentals of {keyword}.",
            key_takeaways=[
                "Key learning point 1",
                "Key learning point 2",
                "Key learning point 3",
            ],
            call_to_action=(
                "Ready to apply what you've learned? Start with these "
                "practical exercises."
            ),
        ),
    )


def build_outline(
    content_type: ContentType, keyword: str, target_audience: str | None = None
) -> ArticleOutline:
    """Return the outline template for a content type.

    Types without their own template use the supporting outline.
    """
    if content_type == ContentType.PILLAR:
        return pillar_outline(keyword, target_audience)
    if content_type == ContentType.LONG_TAIL:
        return long_tail_outline(keyword)
    if content_type == ContentType.TUTORIAL:
        return tutorial_outline(keyword)
    return supporting_outline(keyword)
