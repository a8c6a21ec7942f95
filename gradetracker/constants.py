"""Grade scale, palette and defaults shared by the engine and the app"""

# ------------------------
# Letter grade scale
# ------------------------
# (letter, min, max, colour), highest first. Bounds are inclusive.
GRADE_SCALE = [
    ("A+", 97, 100, "#10b981"),
    ("A", 93, 96, "#10b981"),
    ("A-", 90, 92, "#10b981"),
    ("B+", 87, 89, "#3b82f6"),
    ("B", 83, 86, "#3b82f6"),
    ("B-", 80, 82, "#3b82f6"),
    ("C+", 77, 79, "#f59e0b"),
    ("C", 73, 76, "#f59e0b"),
    ("C-", 70, 72, "#f59e0b"),
    ("D+", 67, 69, "#f97316"),
    ("D", 63, 66, "#f97316"),
    ("D-", 60, 62, "#f97316"),
    ("F", 0, 59, "#ef4444"),
]

MIN_PERCENT = 0.0
MAX_PERCENT = 100.0
MAX_TOTAL_WEIGHT = 100.0

# ------------------------
# Courses and assignments
# ------------------------
ASSIGNMENT_TYPES = [
    "Homework", "Quiz", "Test", "Midterm Exam", "Final Exam",
    "Project", "Lab", "Participation", "Assignment", "Paper",
    "Presentation", "Discussion", "Workshop", "Other",
]
DEFAULT_ASSIGNMENT_TYPE = "Assignment"

# token -> (display name, primary, secondary)
COURSE_COLORS = {
    "blue": ("Blue", "#3b82f6", "#dbeafe"),
    "green": ("Green", "#10b981", "#d1fae5"),
    "purple": ("Purple", "#8b5cf6", "#e9d5ff"),
    "orange": ("Orange", "#f97316", "#fed7aa"),
    "pink": ("Pink", "#ec4899", "#fce7f3"),
    "teal": ("Teal", "#14b8a6", "#ccfbf1"),
    "red": ("Red", "#ef4444", "#fee2e2"),
    "yellow": ("Yellow", "#eab308", "#fef3c7"),
}
DEFAULT_COLOR = "blue"
DEFAULT_TARGET_GRADE = 85.0

MAX_NAME_LENGTH = 100
MAX_CODE_LENGTH = 20

# ------------------------
# Required final grade outlook
# ------------------------
VERY_ACHIEVABLE_MAX = 60.0
ACHIEVABLE_MAX = 85.0
CHALLENGING_MAX = 100.0

# ------------------------
# Demo data (guest mode)
# ------------------------
DEMO_COURSES = [
    {
        "id": 1,
        "name": "Introduction to Computer Science",
        "code": "CS101",
        "target_grade": 85,
        "color": "blue",
        "assignments": [
            {"id": 1, "name": "Homework 1", "grade": 92, "weight": 10, "type": "Homework", "date": "2025-01-15"},
            {"id": 2, "name": "Quiz 1", "grade": 88, "weight": 15, "type": "Quiz", "date": "2025-01-22"},
            {"id": 3, "name": "Midterm Exam", "grade": 82, "weight": 25, "type": "Midterm Exam", "date": "2025-02-15"},
        ],
    },
    {
        "id": 2,
        "name": "Calculus I",
        "code": "MATH201",
        "target_grade": 90,
        "color": "green",
        "assignments": [
            {"id": 4, "name": "Problem Set 1", "grade": 85, "weight": 8, "type": "Homework", "date": "2025-01-10"},
            {"id": 5, "name": "Quiz 1", "grade": 78, "weight": 12, "type": "Quiz", "date": "2025-01-24"},
            {"id": 6, "name": "Midterm Exam", "grade": 87, "weight": 30, "type": "Midterm Exam", "date": "2025-02-20"},
        ],
    },
]
