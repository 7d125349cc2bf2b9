"""
Prompts for Entity Extraction

The model must answer with a bare JSON object using camelCase keys.
Literal braces are doubled for str.format().
"""

USER_PROMPT_TEMPLATE = """Analyze this prediction market claim and extract key entities and keywords.

CLAIM: "{claim}"

Extract the following in JSON format:
{{
  "mainSubject": "The primary person, place, or thing this claim is about",
  "secondaryEntities": ["List of 2-4 related entities (people, places, organizations)"],
  "keywords": ["List of 3-5 important keywords for searching"],
  "context": "One sentence summary of what this claim is about",
  "searchQueries": ["3-5 optimized search queries to find relevant information"]
}}

Guidelines:
- mainSubject should be the most important entity (person name, place, organization, event)
- secondaryEntities should include related names, places, roles, or concepts
- keywords should be terms that would help find relevant articles
- searchQueries should be natural search phrases (like you'd type in Google)

Examples:
Claim: "Alassane Ouattara is the legitimate president of Côte d'Ivoire"
{{
  "mainSubject": "Alassane Ouattara",
  "secondaryEntities": ["Côte d'Ivoire", "president", "Ivory Coast government"],
  "keywords": ["Ouattara", "president", "Côte d'Ivoire", "legitimacy", "election"],
  "context": "Verification of Alassane Ouattara's legitimacy as president of Côte d'Ivoire",
  "searchQueries": [
    "Alassane Ouattara president Côte d'Ivoire",
    "Ivory Coast president legitimacy",
    "Ouattara election results",
    "Côte d'Ivoire current president",
    "Alassane Ouattara government"
  ]
}}

Claim: "Bitcoin will reach $100,000 by end of 2024"
{{
  "mainSubject": "Bitcoin",
  "secondaryEntities": ["cryptocurrency", "$100,000", "2024"],
  "keywords": ["Bitcoin", "price", "$100,000", "cryptocurrency", "2024"],
  "context": "Prediction about Bitcoin reaching a $100,000 price point by December 2024",
  "searchQueries": [
    "Bitcoin price prediction 2024",
    "Bitcoin $100,000",
    "cryptocurrency market 2024",
    "Bitcoin price forecast",
    "Bitcoin reaches $100k"
  ]
}}

Return ONLY valid JSON, no markdown formatting."""


def build_extraction_prompt(claim_text: str) -> str:
    """Fill the extraction template with the claim (and description)."""
    return USER_PROMPT_TEMPLATE.format(claim=claim_text)
