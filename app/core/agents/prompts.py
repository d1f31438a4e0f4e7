"""
Prompts for summary, quiz and study schedule generation.
"""

JSON_ONLY_SYSTEM_PROMPT = """You are an expert learning scientist and study planner.
You MUST return ONLY valid JSON with no markdown, no code blocks, no backticks and no explanatory text. Just pure JSON."""

SUMMARY_SYSTEM_PROMPT = """You are an expert study assistant.
Analyze educational material and write clear, well-structured study summaries."""

SUMMARY_USER_PROMPT_TEMPLATE = """Please analyze the following educational material and create a comprehensive summary.

{special_instructions}Document Content:
{content}

Please provide:
1. A concise executive summary (2-3 sentences)
2. Key concepts and main ideas (bullet points)
3. Important details, definitions, or formulas
4. Learning objectives covered

Format your response in clear sections."""

QUIZ_USER_PROMPT_TEMPLATE = """You are an expert educational quiz generator.

Create a {difficulty} difficulty quiz based ONLY on the material below.

Material:
{content}

Generate exactly {num_questions} multiple-choice questions.

Each question must include:
- question (string)
- options (object with keys A, B, C, D)
- correct_answer (one of A/B/C/D)
- explanation (short explanation)
- topic (short name of the concept the question tests)

Return ONLY a JSON array. Do NOT include markdown or text before or after the JSON.

Expected format:
[
  {{
    "question": "Question text?",
    "options": {{"A": "Option A", "B": "Option B", "C": "Option C", "D": "Option D"}},
    "correct_answer": "A",
    "explanation": "Explanation here",
    "topic": "Topic name"
  }}
]"""

SCHEDULE_USER_PROMPT_TEMPLATE = """Analyze this educational material and create an optimal study schedule.

**Material to Study:**
{content}

**Constraints:**
- Available study time: {hours_per_day} hours per day
- Days until deadline: {days_available} days
- Difficulty level: {difficulty}
- Learning style: {learning_style}
- Number of pages: {num_pages}

**Requirements:**
1. Break content into logical daily sessions
2. Use spaced repetition principles
3. Include different session types: reading, practice, quiz, review
4. Each session should have duration in minutes
5. Provide specific topics for each session
6. Set priority levels (high, medium, low)

**Return this EXACT JSON structure:**

{{
  "total_estimated_hours": 24,
  "recommended_days_needed": 12,
  "schedule": [
    {{
      "day": 1,
      "date": "{start_date}",
      "sessions": [
        {{
          "title": "Introduction to Core Concepts",
          "duration": 60,
          "type": "reading",
          "topics": ["Topic 1", "Topic 2"],
          "description": "Focus on understanding fundamentals",
          "priority": "high"
        }}
      ],
      "daily_goal": "Understand basic principles",
      "total_minutes": 120
    }}
  ],
  "study_tips": ["Tip 1", "Tip 2", "Tip 3"],
  "milestones": [
    {{"day": 4, "milestone": "Complete fundamentals", "assessment": "Self-quiz on key concepts"}}
  ]
}}

**CRITICAL RULES:**
- Each day must have a "sessions" array with all required fields
- Session "type" must be: reading, practice, quiz, or review
- Session "priority" must be: high, medium, or low
- Dates in YYYY-MM-DD format
- Duration in minutes (number)

START YOUR RESPONSE WITH {{ AND END WITH }}"""
