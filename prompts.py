"""
Prompt templates for keyword and meta tag suggestion.
"""

from config import AI, GUIDELINES


def get_keyword_prompt(topic: str, count: int) -> str:
    return (
        f'Generate {count} SEO keyword suggestions for a blog about "{topic}". '
        "Include long-tail keywords. Format each as a JSON object with properties: "
        'keyword, searchVolume (string like "1K-10K"), difficulty (string like "Easy", "Medium", "Hard"), '
        "and relevance (number 1-10). Return a JSON array only."
    )


def get_meta_tags_prompt(title: str, content: str) -> str:
    title_min, title_max = GUIDELINES["ideal_title_length"]
    desc_min, desc_max = GUIDELINES["ideal_description_length"]
    preview = content[:AI["content_preview_chars"]]

    return f"""Based on the following blog title and content, generate optimized SEO meta tags:

Title: {title}

{preview}... (content truncated for brevity)

Generate these as a JSON object with:
1. title: An SEO-optimized title ({title_min}-{title_max} characters)
2. description: An engaging meta description ({desc_min}-{desc_max} characters)
3. keywords: An array of 5-8 relevant keywords/phrases

Format as valid JSON only."""
