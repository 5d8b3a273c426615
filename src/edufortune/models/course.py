"""Content catalog models: courses, lessons, questions, vocabulary."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DifficultyLevel(StrEnum):
    """Course difficulty, ordered Beginner < Intermediate < Advanced."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @property
    def rank(self) -> int:
        return _DIFFICULTY_ORDER.index(self) + 1


_DIFFICULTY_ORDER = [
    DifficultyLevel.BEGINNER,
    DifficultyLevel.INTERMEDIATE,
    DifficultyLevel.ADVANCED,
]


class CourseCategory(StrEnum):
    VOCABULARY = "Vocabulary"
    GRAMMAR = "Grammar"
    CONVERSATION = "Conversation"
    FINANCIAL = "Financial Literacy"
    BUSINESS = "Business Language"

    @property
    def icon(self) -> str:
        return {
            CourseCategory.VOCABULARY: "book.fill",
            CourseCategory.GRAMMAR: "textformat",
            CourseCategory.CONVERSATION: "bubble.left.and.bubble.right.fill",
            CourseCategory.FINANCIAL: "dollarsign.circle.fill",
            CourseCategory.BUSINESS: "briefcase.fill",
        }[self]


class LessonType(StrEnum):
    VOCABULARY = "Vocabulary"
    LISTENING = "Listening"
    READING = "Reading"
    QUIZ = "Quiz"
    FINANCIAL = "Financial Concept"


class QuestionType(StrEnum):
    MULTIPLE_CHOICE = "Multiple Choice"
    TRUE_FALSE = "True/False"
    FILL_IN_BLANK = "Fill in the Blank"


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    options: list[str]
    correct_answer: int
    explanation: str = ""
    type: QuestionType = QuestionType.MULTIPLE_CHOICE


class VocabularyItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    definition: str
    example: str
    financial_context: str | None = None
    pronunciation: str | None = None


class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str = ""
    type: LessonType = LessonType.VOCABULARY
    duration: int = Field(default=15, ge=0)  # minutes
    questions: list[Question] = Field(default_factory=list)
    financial_tip: str | None = None
    vocabulary: list[VocabularyItem] = Field(default_factory=list)
    order: int = 1


class Course(BaseModel):
    """Immutable catalog entry. `is_unlocked` is the catalog default; the
    effective value comes from the course-state overlay."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    language: str = "English"
    description: str = ""
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER
    estimated_duration: int = Field(default=30, ge=0)  # minutes
    lessons: list[Lesson] = Field(default_factory=list)
    category: CourseCategory = CourseCategory.VOCABULARY
    is_unlocked: bool = True
    image_name: str = "book.fill"

    def lesson(self, lesson_id: str) -> Lesson | None:
        return next((lesson for lesson in self.lessons if lesson.id == lesson_id), None)


class CourseState(BaseModel):
    """Mutable per-course overlay persisted next to the learner's progress."""

    course_id: str
    is_unlocked: bool | None = None
    completed_lessons: list[str] = Field(default_factory=list)
