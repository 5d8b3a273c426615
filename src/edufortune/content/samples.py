"""Built-in course catalog shipped with the app."""

from edufortune.models.course import (
    Course,
    CourseCategory,
    DifficultyLevel,
    Lesson,
    LessonType,
    Question,
    QuestionType,
    VocabularyItem,
)

BANKING_BASICS = Lesson(
    id="banking-basics",
    title="Banking Basics",
    content=(
        "Learn fundamental banking terms and concepts that will help you "
        "navigate financial institutions with confidence."
    ),
    type=LessonType.FINANCIAL,
    duration=15,
    questions=[
        Question(
            id="banking-basics-q1",
            prompt="What is a checking account primarily used for?",
            options=["Long-term savings", "Daily transactions", "Investment", "Loans"],
            correct_answer=1,
            explanation=(
                "A checking account is designed for daily transactions like "
                "paying bills and making purchases."
            ),
        ),
        Question(
            id="banking-basics-q2",
            prompt="Interest rates on savings accounts are always fixed.",
            options=["True", "False"],
            correct_answer=1,
            explanation=(
                "Interest rates on savings accounts can be variable and may "
                "change based on market conditions."
            ),
            type=QuestionType.TRUE_FALSE,
        ),
    ],
    financial_tip=(
        "Always compare interest rates between different banks before opening "
        "a savings account."
    ),
    vocabulary=[
        VocabularyItem(
            word="Interest",
            definition="Money paid regularly at a particular rate for the use of money lent",
            example="The bank pays 2% interest on savings accounts.",
            financial_context="Interest is how your money grows in savings accounts",
            pronunciation="/ˈɪntrəst/",
        ),
        VocabularyItem(
            word="Balance",
            definition="The amount of money in a bank account",
            example="My account balance is $1,500.",
            financial_context="Always keep track of your account balance to avoid overdraft fees",
            pronunciation="/ˈbæləns/",
        ),
    ],
    order=1,
)

CREDIT_AND_DEBT = Lesson(
    id="credit-and-debt",
    title="Credit and Debt",
    content="Understanding credit scores, credit cards, and managing debt responsibly.",
    type=LessonType.VOCABULARY,
    duration=20,
    questions=[
        Question(
            id="credit-and-debt-q1",
            prompt="What is a good credit score range?",
            options=["300-500", "500-650", "650-750", "750-850"],
            correct_answer=3,
            explanation=(
                "A credit score between 750-850 is considered excellent and will "
                "qualify you for the best interest rates."
            ),
        ),
    ],
    financial_tip="Pay your credit card bills on time to maintain a good credit score.",
    vocabulary=[
        VocabularyItem(
            word="Credit Score",
            definition="A number that represents your creditworthiness",
            example="Her credit score of 780 qualified her for a low-interest loan.",
            financial_context="A higher credit score means better loan terms and lower interest rates",
            pronunciation="/ˈkredɪt skɔr/",
        ),
    ],
    order=2,
)

MEETING_ETIQUETTE = Lesson(
    id="meeting-etiquette",
    title="Meeting Etiquette",
    content="Professional communication skills for business meetings and presentations.",
    type=LessonType.LISTENING,
    duration=25,
    questions=[
        Question(
            id="meeting-etiquette-q1",
            prompt="What should you do before speaking in a meeting?",
            options=[
                "Interrupt immediately",
                "Wait for a pause",
                "Raise your hand",
                "Send a message",
            ],
            correct_answer=1,
            explanation=(
                "Waiting for a natural pause shows respect for other speakers "
                "and maintains professional decorum."
            ),
        ),
    ],
    financial_tip=(
        "Good communication skills can lead to better career opportunities and "
        "higher salaries."
    ),
    vocabulary=[
        VocabularyItem(
            word="Agenda",
            definition="A list of items to be discussed at a formal meeting",
            example="Please review the agenda before tomorrow's meeting.",
            financial_context=(
                "Following meeting agendas helps maximize productivity and "
                "business outcomes"
            ),
            pronunciation="/əˈdʒendə/",
        ),
    ],
    order=1,
)

PORTFOLIO_TERMS = Lesson(
    id="portfolio-terms",
    title="Portfolio Terms",
    content="Diversification, asset classes and the language of risk.",
    type=LessonType.READING,
    duration=30,
    questions=[
        Question(
            id="portfolio-terms-q1",
            prompt="What does diversification mean?",
            options=[
                "Buying one stock",
                "Spreading investments across different assets",
                "Selling everything",
                "Borrowing to invest",
            ],
            correct_answer=1,
            explanation="Diversification spreads risk across many different assets.",
        ),
        Question(
            id="portfolio-terms-q2",
            prompt="A bond is a form of equity ownership.",
            options=["True", "False"],
            correct_answer=1,
            explanation="A bond is a loan to an issuer; equity is ownership.",
            type=QuestionType.TRUE_FALSE,
        ),
    ],
    financial_tip="Never invest money you might need within the next year.",
    vocabulary=[
        VocabularyItem(
            word="Portfolio",
            definition="A collection of investments held by a person or organization",
            example="Her portfolio includes stocks, bonds and real estate.",
            financial_context="Review your portfolio at least once a year",
            pronunciation="/pɔːrtˈfoʊlioʊ/",
        ),
    ],
    order=1,
)

VERB_TENSES = Lesson(
    id="verb-tenses",
    title="Present and Past Tenses",
    content="Use the present simple and past simple correctly.",
    type=LessonType.QUIZ,
    duration=15,
    questions=[
        Question(
            id="verb-tenses-q1",
            prompt="Yesterday I ___ to the bank.",
            options=["go", "went", "gone", "going"],
            correct_answer=1,
            explanation="'Yesterday' signals the past simple: went.",
            type=QuestionType.FILL_IN_BLANK,
        ),
        Question(
            id="verb-tenses-q2",
            prompt="She ___ her budget every month.",
            options=["check", "checks", "checking", "checked"],
            correct_answer=1,
            explanation="Habits use the present simple; third person adds -s.",
            type=QuestionType.FILL_IN_BLANK,
        ),
    ],
    order=1,
)

ARTICLES = Lesson(
    id="articles",
    title="Articles: a, an, the",
    content="Choose the right article before nouns.",
    type=LessonType.QUIZ,
    duration=10,
    questions=[
        Question(
            id="articles-q1",
            prompt="I opened ___ account at the bank.",
            options=["a", "an", "the", "no article"],
            correct_answer=1,
            explanation="'Account' begins with a vowel sound, so use 'an'.",
            type=QuestionType.FILL_IN_BLANK,
        ),
    ],
    order=2,
)

SAMPLE_COURSES: list[Course] = [
    Course(
        id="financial-english-basics",
        title="Financial English Basics",
        description="Learn essential financial vocabulary and concepts in English",
        difficulty=DifficultyLevel.BEGINNER,
        estimated_duration=45,
        lessons=[BANKING_BASICS, CREDIT_AND_DEBT],
        category=CourseCategory.FINANCIAL,
        image_name="dollarsign.circle.fill",
    ),
    Course(
        id="business-conversations",
        title="Business Conversations",
        description="Master professional communication in business settings",
        difficulty=DifficultyLevel.INTERMEDIATE,
        estimated_duration=60,
        lessons=[MEETING_ETIQUETTE],
        category=CourseCategory.BUSINESS,
        image_name="briefcase.fill",
    ),
    Course(
        id="investment-vocabulary",
        title="Investment Vocabulary",
        description="Advanced financial terms for investment and trading",
        difficulty=DifficultyLevel.ADVANCED,
        estimated_duration=90,
        lessons=[PORTFOLIO_TERMS],
        category=CourseCategory.FINANCIAL,
        image_name="chart.line.uptrend.xyaxis",
    ),
    Course(
        id="grammar-fundamentals",
        title="Grammar Fundamentals",
        description="Master essential English grammar rules and structures",
        difficulty=DifficultyLevel.BEGINNER,
        estimated_duration=40,
        lessons=[VERB_TENSES, ARTICLES],
        category=CourseCategory.GRAMMAR,
        image_name="textformat",
    ),
]
