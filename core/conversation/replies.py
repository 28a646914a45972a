"""User-facing texts and inline keyboards"""
from typing import Any, Dict, List, Tuple

from models.schemas import ButtonAction


def inline_keyboard(buttons: List[Tuple[str, ButtonAction]]) -> Dict[str, Any]:
    """Send options for a one-button-per-row inline keyboard"""
    return {
        "reply_markup": {
            "inline_keyboard": [
                [{"text": text, "callback_data": action.value}] for text, action in buttons
            ]
        }
    }


WELCOME_MESSAGE = """🌟 Welcome to Resume Assistant Bot 🌟

I can help you with:
• Resume optimization
• Interview preparation
• ATS score checking
• Mock interviews"""

MAIN_MENU = inline_keyboard([
    ('📝 Upload Resume', ButtonAction.UPLOAD_RESUME),
    ('📊 Check ATS Score', ButtonAction.ATS_SCORE),
    ('❓ Generate Questions', ButtonAction.GENERATE_QUESTIONS),
    ('🎤 Start Mock Interview', ButtonAction.MOCK_INTERVIEW),
    ('🛠️ Resume Analysis', ButtonAction.ANALYZE_RESUME),
    ('ℹ️ Help', ButtonAction.HELP),
])

QUESTION_TYPE_PROMPT = '❓ What type of questions would you like?'

QUESTION_TYPE_MENU = inline_keyboard([
    ('From Resume', ButtonAction.GENERATE_FROM_RESUME),
    ('General Questions', ButtonAction.GENERAL_QUESTIONS),
    ('Technical Questions', ButtonAction.TECH_QUESTIONS),
    ('Behavioral Questions', ButtonAction.BEHAVIORAL_QUESTIONS),
])

RESUME_ACTION_MENU = inline_keyboard([
    ('📊 Get ATS Score', ButtonAction.ACTION_ATS),
    ('❓ Generate Questions', ButtonAction.ACTION_GENERATE_QUESTIONS),
    ('🔍 Analyze Content', ButtonAction.ACTION_CONTENT_ANALYSIS),
    ('💼 Optimize for Role', ButtonAction.ACTION_OPTIMIZE_ROLE),
])

UPLOAD_PROMPTS = {
    ButtonAction.UPLOAD_RESUME: '📤 Please upload your resume in PDF format',
    ButtonAction.ATS_SCORE: '📊 To check your ATS score, please upload your resume (PDF)',
    ButtonAction.ANALYZE_RESUME: '🔍 For detailed resume analysis, please upload your resume (PDF)',
    ButtonAction.GENERATE_FROM_RESUME: '📄 To generate questions from your resume, please upload it (PDF)',
}

HELP_MESSAGE = """🆘 Help Guide 🆘

📝 Upload Resume - Analyze and optimize your resume PDF
📊 ATS Score - Check how well your resume passes automated systems
❓ Interview Questions - Get tailored questions for practice
🎤 Mock Interview - Practice with simulated interview
🛠️ Resume Analysis - Get detailed feedback on your resume

Commands:
/start - Show main menu
/end_interview - Stop mock interview
/help - Show this message

🔍 For best results, upload your resume first to get personalized suggestions."""

# (progress notice, heading) for the question list buttons
QUESTION_LIST_REPLIES = {
    ButtonAction.GENERAL_QUESTIONS: ('⏳ Generating general interview questions...', '📝 General Interview Questions'),
    ButtonAction.TECH_QUESTIONS: ('⏳ Generating technical interview questions...', '💻 Technical Interview Questions'),
    ButtonAction.BEHAVIORAL_QUESTIONS: ('⏳ Generating behavioral interview questions...', '🤝 Behavioral Interview Questions'),
}

MOCK_INTERVIEW_INTRO = (
    '🎤 Starting Mock Interview\n\n'
    'I will ask you questions one by one. Reply to each question.\n'
    'Type /end_interview to stop.'
)
MOCK_INTERVIEW_FAILED = '⚠️ Could not generate questions. Please try again.'
MOCK_INTERVIEW_COMPLETED = (
    '🎉 Mock Interview Completed!\n\n'
    'Review your answers and feedback. Practice makes perfect!\n\n'
    'Type /start to explore other features.'
)
NO_ACTIVE_INTERVIEW = '⚠️ No active mock interview to end.'
UNEXPECTED_ERROR = "⚠️ Sorry, something went wrong. Please try again or type /start to begin again."

PDF_ONLY = '⚠️ Please upload a PDF file only.'
PROCESSING_RESUME = '⏳ Processing your resume...'
RESUME_PROCESSING_FAILED = "⚠️ Error processing your resume. Please ensure it's a valid PDF and try again."

NO_SKILLS_FOR_QUESTIONS = '⚠️ No skills detected to generate specific questions. Try general questions instead.'
GENERATING_TAILORED_QUESTIONS = '⏳ Generating tailored interview questions...'
TAILORED_QUESTIONS_HEADING = '🎯 Tailored Interview Questions'
ANALYZING_CONTENT = '🔍 Analyzing your resume content...'
ANALYSIS_HEADING = '📝 Resume Analysis Report'
ASK_JOB_TITLE = '💼 Please reply with the exact job title you\'re targeting (e.g., "Senior Frontend Developer"):'


def question_message(index: int, total: int, question: str) -> str:
    """Announce interview question ``index`` (zero-based)"""
    return f"❓ Question {index + 1}/{total}:\n\n{question}"


def feedback_message(feedback: str) -> str:
    return f"💡 Feedback:\n{feedback}"


def resume_processed_message(skills: List[str]) -> str:
    if skills:
        return (
            f"✅ Resume processed successfully!\n\n🔧 Skills detected:\n{', '.join(skills)}\n\n"
            "What would you like to do?"
        )
    return (
        '✅ Resume processed, but no specific skills detected. Consider adding more keywords.\n\n'
        'What would you like to do?'
    )


def optimizing_message(job_title: str) -> str:
    return f'⏳ Optimizing your resume for "{job_title}"...'


def optimization_message(job_title: str, optimization: str) -> str:
    return f"💼 Optimization for {job_title}\n\n{optimization}"


def with_heading(heading: str, body: str) -> str:
    return f"{heading}\n\n{body}"
