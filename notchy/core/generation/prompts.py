"""
Study-aid prompt templates.

Two prompts per artifact: a topics prompt over the document summaries and
an artifact prompt over the topics and the retrieved context. Literal JSON
examples are brace-escaped for ChatPromptTemplate.

Dependencies: langchain_core.prompts
System role: Prompt templates for structured generation
"""

from langchain_core.prompts import ChatPromptTemplate

TOPICS_HUMAN = """Identify 5 key topics from these documents:

{summaries}

Respond with a JSON object of the form {{"topics": ["topic 1", "topic 2", "topic 3", "topic 4", "topic 5"]}}."""

MCQ_TOPICS_SYSTEM = (
    "You are a helpful AI that identifies key topics from educational content. "
    "Extract 5 main topics or concepts that would be good for multiple choice questions."
)

FLASHCARD_TOPICS_SYSTEM = (
    "You are a helpful AI that identifies key topics from educational content. "
    "Extract 5 main topics or concepts that would be good for flashcards."
)

MINDMAP_TOPICS_SYSTEM = (
    "You are a helpful AI that analyzes content and identifies the main topic and key "
    "subtopics for a mind map. Extract the main topic first, followed by 4-6 key subtopics "
    "that would create a good hierarchical structure."
)

MCQ_SYSTEM = """You are a helpful AI that generates high-quality multiple choice questions. Generate EXACTLY 5 multiple choice questions based on the given content. Focus on these key topics:

{topics}

For each question:

1. The question should be clear and concise
2. Provide exactly 4 options labeled as A, B, C, and D
3. Ensure only one option is correct
4. Include a brief explanation for why the correct answer is right
5. When relevant, mention which document the information comes from

Your response must be a valid JSON string matching this exact format:
{{
  "questions": [
    {{
      "question": "Question text here?",
      "options": ["A) First option", "B) Second option", "C) Third option", "D) Fourth option"],
      "correctAnswer": "A) First option",
      "explanation": "Explanation here"
    }}
  ]
}}"""

FLASHCARD_SYSTEM = """You are a helpful AI that creates educational flashcards. Create 5 flashcards from the given text, focusing on these topics:

{topics}

Each flashcard should have:
1. A concise question/concept on the front
2. A clear, detailed explanation on the back

Format your response as a JSON object with a "flashcards" array of objects with 'front' and 'back' properties.
Example:
{{
  "flashcards": [
    {{
      "front": "What is photosynthesis?",
      "back": "The process by which plants convert sunlight into energy, producing oxygen as a byproduct"
    }}
  ]
}}

Guidelines:
- Create EXACTLY 5 flashcards
- Keep the front concise but clear
- Make the back detailed but not too long
- Cover different aspects of the content
- Base all content strictly on the provided text
- Ensure the response is valid JSON
- Return ONLY the JSON object, no additional text or formatting
- When relevant, mention which document the information comes from"""

MINDMAP_SYSTEM = """You are a helpful AI that creates educational mind maps. Create a hierarchical mind map from the given text, using this structure as a guide:

{topics}

The mind map should be valid JSON and follow this exact format:
{{
  "title": "Main Topic",
  "rootNode": {{
    "id": "root",
    "text": "Central Concept",
    "children": [
      {{
        "id": "unique-id-1",
        "text": "Main Branch 1",
        "note": "Additional information about this concept (include source document when relevant)",
        "color": "#hexcolor",
        "children": [
          {{
            "id": "unique-id-2",
            "text": "Sub-concept 1",
            "note": "Detailed explanation (include source document when relevant)"
          }}
        ]
      }}
    ]
  }}
}}"""

SUMMARIZE_SYSTEM = (
    "You are a helpful assistant that generates concise summaries of text. "
    "Keep summaries clear and to the point."
)


def _topics_prompt(system: str) -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages([
        ("system", system),
        ("human", TOPICS_HUMAN),
    ])


MCQ_TOPICS_PROMPT = _topics_prompt(MCQ_TOPICS_SYSTEM)
FLASHCARD_TOPICS_PROMPT = _topics_prompt(FLASHCARD_TOPICS_SYSTEM)
MINDMAP_TOPICS_PROMPT = _topics_prompt(MINDMAP_TOPICS_SYSTEM)

MCQ_PROMPT = ChatPromptTemplate.from_messages([
    ("system", MCQ_SYSTEM),
    ("human", "Generate 5 MCQs from these documents:\n\n{context}"),
])

FLASHCARD_PROMPT = ChatPromptTemplate.from_messages([
    ("system", FLASHCARD_SYSTEM),
    ("human", "Create 5 flashcards from these documents:\n\n{context}"),
])

MINDMAP_PROMPT = ChatPromptTemplate.from_messages([
    ("system", MINDMAP_SYSTEM),
    ("human", "Create a mind map from these documents:\n\n{context}"),
])

SUMMARIZE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SUMMARIZE_SYSTEM),
    ("human", "Please provide a concise summary of the following text:\n\n{text}"),
])
