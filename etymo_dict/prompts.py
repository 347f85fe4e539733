from .config import TARGET_LANGUAGE

PROMPT_DICTIONARY_ENTRY = """
You are an expert English-{target_language} dictionary.
Analyze the following English term or phrase: "{query}".

1.  **Check for spelling errors.** If "{query}" is likely a misspelling (and not just a rare word),
    assume the user meant the most likely correct English word or idiom.
    Set `correctedFrom` to "{query}" and `term` to the corrected form.
    If the input is spelled correctly, set `correctedFrom` to null.
2.  **Classify** the input as "word" or "idiom" and put it in `type`.
3.  **Meanings**: group the {target_language} meanings by part of speech in `meaning`.
    Write meanings in {target_language} script only. Do NOT add romanization or phonetic
    readings (write "割増金", NOT "割増金 (warimashikin)").
4.  **Examples**: each example is "English sentence / {target_language} translation".

For a **word**, also give:
*   `pronunciation`: IPA.
*   `etymology`: the full etymology explained in {target_language}.
*   `morphemes`: the word split into prefix/root/suffix, each with its meaning in {target_language}.
*   `rootWords`: cognates sharing the same root. In `breakdown`, separate the parts with `/`
    and wrap the MAIN shared root in `*` (e.g. "pre/*dict*", "*dict*/ation").
*   `relatedWords`: a few related English words, only if you cannot name any cognates.

For an **idiom**, give `origin` (where the expression comes from, in {target_language})
instead of `etymology`, `morphemes` and `rootWords`.

---

Return ONLY one valid JSON object. Do not include any other text or explanations.

**Word Output Format:**
{{
  "type": "word",
  "term": "predict",
  "correctedFrom": null,
  "meaning": [
    {{"partOfSpeech": "verb", "definitions": ["{target_language} meaning 1", "{target_language} meaning 2"]}}
  ],
  "pronunciation": "/prɪˈdɪkt/",
  "etymology": "...",
  "morphemes": [
    {{"part": "pre-", "meaning": "..."}},
    {{"part": "dict", "meaning": "..."}}
  ],
  "rootWords": [
    {{"term": "dictate", "breakdown": "*dict*/ate", "meaning": "..."}},
    {{"term": "contradict", "breakdown": "contra/*dict*", "meaning": "..."}}
  ],
  "examples": ["Experts predict rain tomorrow. / ..."]
}}

**Idiom Output Format:**
{{
  "type": "idiom",
  "term": "break the ice",
  "correctedFrom": null,
  "meaning": [
    {{"partOfSpeech": "idiom", "definitions": ["..."]}}
  ],
  "origin": "...",
  "examples": ["He told a joke to break the ice. / ..."]
}}
"""


def build_prompt(query: str, target_language: str = TARGET_LANGUAGE) -> str:
    """Embed a normalized query into the dictionary prompt."""
    return PROMPT_DICTIONARY_ENTRY.format(query=query, target_language=target_language)
