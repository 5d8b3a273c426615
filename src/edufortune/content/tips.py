"""Curated pool of financial-English tips."""

from edufortune.models.course import DifficultyLevel
from edufortune.models.recommendation import FinancialTip, TipCategory

TIP_POOL: list[FinancialTip] = [
    FinancialTip(
        title="Emergency Fund Vocabulary",
        content=(
            "Learn key terms: 'Emergency fund' means money saved for unexpected "
            "expenses. Aim to save 3-6 months of expenses. Practice saying: "
            "'I'm building my emergency fund for financial security.'"
        ),
        category=TipCategory.SAVING,
        difficulty=DifficultyLevel.BEGINNER,
        related_vocabulary=["Emergency fund", "Expenses", "Financial security", "Savings account"],
    ),
    FinancialTip(
        title="Investment Terminology",
        content=(
            "Master these investment words: 'Diversification' means spreading "
            "investments across different assets. 'Portfolio' is your collection "
            "of investments. Practice: 'I diversify my portfolio to reduce risk.'"
        ),
        category=TipCategory.INVESTING,
        difficulty=DifficultyLevel.INTERMEDIATE,
        related_vocabulary=["Diversification", "Portfolio", "Assets", "Risk management"],
    ),
    FinancialTip(
        title="Credit Score Communication",
        content=(
            "Important phrases for credit discussions: 'My credit score is...' "
            "'I'm working to improve my creditworthiness.' 'I pay my bills on "
            "time to maintain good credit.'"
        ),
        category=TipCategory.CREDIT_DEBT,
        difficulty=DifficultyLevel.BEGINNER,
        related_vocabulary=["Credit score", "Creditworthiness", "Payment history", "Credit report"],
    ),
    FinancialTip(
        title="Budgeting Expressions",
        content=(
            "Essential budgeting phrases: 'I allocate 50% for needs, 30% for "
            "wants, 20% for savings.' 'I track my expenses monthly.' 'I stick "
            "to my budget to reach my goals.'"
        ),
        category=TipCategory.BUDGETING,
        difficulty=DifficultyLevel.BEGINNER,
        related_vocabulary=["Allocate", "Expenses", "Budget", "Financial goals"],
    ),
    FinancialTip(
        title="Salary Negotiation Language",
        content=(
            "Professional phrases for salary discussions: 'Based on my research "
            "and experience...' 'I would like to discuss my compensation.' 'My "
            "salary expectations are...'"
        ),
        category=TipCategory.CAREER_FINANCE,
        difficulty=DifficultyLevel.ADVANCED,
        related_vocabulary=[
            "Compensation",
            "Salary expectations",
            "Market rate",
            "Professional experience",
        ],
    ),
    FinancialTip(
        title="Banking Conversations",
        content=(
            "Common banking phrases: 'I'd like to open a checking account.' "
            "'What's the interest rate on savings?' 'Can you explain the fees?' "
            "'I need to transfer funds.'"
        ),
        category=TipCategory.BUDGETING,
        difficulty=DifficultyLevel.BEGINNER,
        related_vocabulary=["Checking account", "Interest rate", "Bank fees", "Transfer funds"],
    ),
    FinancialTip(
        title="Learning Consistency",
        content=(
            "Study financial English for just 15 minutes daily. Consistency "
            "beats intensity! Use the vocabulary in real conversations. Practice "
            "makes permanent, not perfect."
        ),
        category=TipCategory.LANGUAGE_LEARNING,
        difficulty=DifficultyLevel.BEGINNER,
        related_vocabulary=["Consistency", "Daily practice", "Vocabulary", "Real conversations"],
    ),
]
