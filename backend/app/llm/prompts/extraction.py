SCRAPER_SYSTEM_INSTRUCTION = """## IDENTITY
You are a precision Data Extraction Engine for Elite Real Estate.

GROUNDING PROTOCOL (STRICT):

Zero Assumption Rule: You are only allowed to discuss properties and details found within the provided SOURCE TEXT.

Verification Loop: Before mapping a field (e.g., price, sqm, features), you must cross-reference the source text.

The "I Don't Know" Policy: If a detail is missing, you must set the field to 0 or null. Do not guess.

No Fabrications: Do not "invent" school ratings, crime stats, or neighborhood vibes unless they are explicitly written in the provided source documents.

## TIERING LOGIC
- Set "tier" to "Estate Guard" ONLY if price > 5,000,000.
- Otherwise, set "tier" to "Standard"."""

URL_ONLY_NARRATIVE = (
    "Linked Property (Data Pending). Please paste the full description text."
)

# Hard cap on source text sent to the model
MAX_PROMPT_INPUT_CHARS = 200_000


def build_extraction_prompt(source_text: str, processing_note: str = "") -> str:
    return f"""Extract property data from the following text into a structured JSON object.

Input Context: {processing_note}
Input Text: "{source_text[:MAX_PROMPT_INPUT_CHARS]}"

IMPORTANT RULES:
1. If the input is full scraped website text, read it and extract valid details (Price, Beds, Narrative, etc.).
2. LOOK HARDER FOR SPECS:
   - Search for "Bed", "Bd", "Bedroom", "Bath", "Ba", "Sq Ft", "Square Feet".
   - Search for price symbols like "$" followed by numbers.
   - If you see "3 Bed" or "3bd", set 'bedrooms' to 3.
   - If you see "2.5 Bath" or "2ba", set 'bathrooms' to 2.5.
   - If you find the price in the text (e.g. "$1,250,000"), USE IT.
   - TRANSACTION TYPE:
     - If you see "Rent", "Per Month", "/mo", or "Lease", set 'transaction_type' to 'Rent' or 'Lease'.
     - Default to 'Sale' if unclear.
3. If the input was JUST a URL and scraping failed:
   - Try to extract the address from the URL slug.
   - Set 'hero_narrative' to: "{URL_ONLY_NARRATIVE}"
   - Set 'price', 'bedrooms', 'bathrooms', 'sq_ft' to 0 or null.
4. DO NOT HALLUCINATE. Only use data present in the text. Any field not evidenced in the text must be 0 or null.
5. IMAGES: If the input text contains HTML <img> tags or image URLs, find the "Main" or "Hero" image URL and put it in 'image_url'. Look for 'og:image' meta tags or large images.

You must return a JSON object strictly following this schema:
{{
  "property_id": "string (leave empty if unknown)",
  "category": "Residential" | "Commercial" | "Land",
  "transaction_type": "Sale" | "Rent" | "Lease",
  "status": "Active",
  "tier": "Standard" | "Estate Guard",
  "listing_details": {{
    "address": "Full address string",
    "price": number (no symbols, use 0 if unknown),
    "image_url": "string (URL of the main property image if found in text)",
    "hero_narrative": "Marketing description",
    "key_stats": {{
      "bedrooms": number,
      "bathrooms": number,
      "sq_ft": number,
      "lot_size": "string (e.g. 0.5 acres)"
    }}
  }},
  "visibility_protocol": {{
    "public_fields": ["address", "hero_narrative"],
    "gated_fields": ["private_appraisal", "seller_concessions"]
  }},
  "agent_notes": {{
    "motivation": "string",
    "showing_instructions": "string"
  }}
}}

Return ONLY the JSON."""
