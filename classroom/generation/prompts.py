"""
Templates for LLM prompts.
"""

# --- SHARED SYSTEM PROMPT ---

CONTENT_SYSTEM_PROMPT = """
You are an experienced English-language teacher who writes classroom speaking material.
Everything you write must be classroom-safe and inclusive, and avoid politics, religion
and deeply personal topics.
Always answer with a single JSON object and nothing else: no markdown, no explanation.
"""

# --- SHARED FRAGMENTS ---

CEFR_GUIDE = """
CEFR Level: {cefr_level}
- A1: Very simple, concrete topics (favourite things, daily routine, family)
- A2: Familiar, concrete topics (routines, preferences, simple past experiences)
- B1: Personal experiences, opinions, comparisons
- B2: Abstract ideas, hypotheticals, explaining perspectives
- C1/C2: Complex reasoning, nuanced opinions, professional themes
"""

GUIDANCE_FRAGMENT = '\nTeacher\'s topic guidance: "{guidance}"\n'

EXCLUSION_FRAGMENT = """
DO NOT repeat any of these (already used in this class):
{exclusions}
"""

# --- ACTIVITY INSTRUCTIONS ---

FOUR_THREE_TWO_INSTRUCTION = """
You are generating speaking prompts for a "4-3-2" fluency activity.
Students speak about the SAME topic three times to new partners, with less time
each round (4, 3 then 2 minutes), refining and compressing their ideas.

TASK: Generate exactly {count} different speaking prompts.

PROMPT STYLE:
- 2-3 flowing sentences, not bullet points
- Invite storytelling, reflection or extended explanation
- Rich enough to sustain 4 minutes of speaking
- Personal enough that every student has something to say
- No yes/no framings, no debate framings
{cefr_guide}{guidance}{exclusions}
OUTPUT FORMAT:
{{"prompts": ["First prompt...", "Second prompt..."]}}
"""

QUESTION_CARDS_INSTRUCTION = """
You are generating discussion questions for a "Speaking Cards" activity.
One question is shown at a time; students discuss in pairs or small groups.
There are no right or wrong answers: questions spark conversation, not debate.

TASK: Generate exactly {count} discussion questions.

Mix question types: opinions, experiences, likes/dislikes, hypotheticals, preferences.

KEY REQUIREMENTS:
- Each question stands alone (no sub-questions)
- Questions invite extended answers, not yes/no
- Anyone in the class can answer them
{cefr_guide}{guidance}{exclusions}
OUTPUT FORMAT:
{{"prompts": ["First question?", "Second question?"]}}
"""

AGREE_DISAGREE_INSTRUCTION = """
You are generating statements for an "Agree/Disagree" speaking activity.
Students decide whether they agree, the teacher tallies opinions, and students
with DIFFERENT opinions pair up to understand the other side.

TASK: Generate exactly {count} debatable statements.

Each statement must contrast two options or perspectives, for example
"X is more important than Y" or "People should X rather than Y".
Both positions must be defensible and the room should split roughly 50/50.
One sentence each.
{cefr_guide}{guidance}{exclusions}
OUTPUT FORMAT:
{{"statements": ["First contrasting statement.", "Second contrasting statement."]}}
"""

TIMED_TALK_INSTRUCTION = """
You are generating a "Timed Talk" task card in the style of IELTS Speaking Part 2.

TASK: Create ONE task card:
- A main instruction starting with "Describe..." or "Talk about..."
- Exactly 4 short bullet points guiding the student to concrete, personal details
{cefr_guide}{guidance}{exclusions}
OUTPUT FORMAT:
{{"prompt": {{"question": "Describe a book you have read recently.",
  "points": ["what the book was called", "what it was about",
             "why you decided to read it", "whether you would recommend it"]}}}}
"""

THIS_OR_THAT_INSTRUCTION = """
You are generating "This or That" discussion sets for a language classroom.

TASK: Generate {count} unique sets, each with exactly {options_per_set} options for
students to choose between and discuss.

REQUIREMENTS:
1. No obvious "right" answer in any set
2. Options in a set are comparable (same category or a clear contrast)
3. Vocabulary matches the CEFR level; short phrases or single words
4. Be creative and avoid overused combinations
{cefr_guide}{guidance}{exclusions}
OUTPUT FORMAT:
{{"sets": [{{"options": ["Option A", "Option B"]}}]}}
"""
