import logging
import os
from datetime import date

import pandas as pd
import streamlit as st

from gradetracker.backend_logic import round_1dp_half_up
from gradetracker.constants import (
    ASSIGNMENT_TYPES,
    COURSE_COLORS,
    DEFAULT_ASSIGNMENT_TYPE,
    DEFAULT_TARGET_GRADE,
    DEMO_COURSES,
)
from gradetracker.course_summary import (
    add_assignment,
    check_assignment_budget,
    course_summary,
    edit_course,
    final_grade_scenario,
    remove_assignment,
    update_assignment,
)
from gradetracker.errors import GradeTrackerError
from gradetracker.io_csv import parse_assignments, read_csv_upload, validate_assignments_csv
from gradetracker.models import Assignment, Course, assignments_by_date, ensure_unique_code

logging.basicConfig(
    level=os.environ.get("GRADETRACKER_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("gradetracker.app")

DEMO_MODE = os.environ.get("GRADETRACKER_DEMO", "1").lower() in {"1", "true", "yes"}


# ------------------------
# Session helpers
# ------------------------

def _seed_courses():
    if DEMO_MODE:
        return [Course.from_dict(c) for c in DEMO_COURSES]
    return []


def _next_id(items) -> int:
    return max((i.id for i in items), default=0) + 1


def _save_course(course: Course):
    st.session_state["courses"] = [
        course if c.id == course.id else c for c in st.session_state["courses"]
    ]


def _fmt(x: float) -> str:
    return f"{round_1dp_half_up(x):.1f}%"


# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="GradeTracker | Weighted Grades & Final Exam Targets",
    page_icon="🎓",
    layout="wide",
)

if "courses" not in st.session_state:
    st.session_state["courses"] = _seed_courses()

st.title("🎓 GradeTracker")
st.write(
    "Track your courses and weighted assignments, see your current letter grade, "
    "and find out what you need on the rest of the course to hit your target."
)

if DEMO_MODE:
    col1, col2 = st.columns([6, 1])
    with col1:
        st.caption("Demo mode: courses live in this browser session only.")
    with col2:
        if st.button("Reset demo"):
            st.session_state["courses"] = _seed_courses()
            st.success("Demo data has been reset to defaults.")

courses = st.session_state["courses"]

with st.sidebar:
    st.subheader("Add a course")
    with st.form("course_form", clear_on_submit=True):
        name = st.text_input("Course name")
        code = st.text_input("Course code")
        target = st.number_input("Target grade", 0.0, 100.0, DEFAULT_TARGET_GRADE, step=0.5)
        color = st.selectbox(
            "Colour", list(COURSE_COLORS.keys()), format_func=lambda k: COURSE_COLORS[k][0]
        )
        if st.form_submit_button("Save course", type="primary"):
            try:
                new_course = Course(id=_next_id(courses), name=name, code=code,
                                    target_grade=target, color=color)
                ensure_unique_code(courses, new_course.code)
            except GradeTrackerError as e:
                st.error(e.message)
            else:
                st.session_state["courses"] = courses + [new_course]
                courses = st.session_state["courses"]
                st.success("Course created successfully!")

if not courses:
    st.info("Add your first course from the sidebar to get started.")
    st.stop()

# ------------------------
# Course overview
# ------------------------

st.subheader("Your courses")
cards = st.columns(min(len(courses), 4))
for i, c in enumerate(courses):
    s = course_summary(c)
    with cards[i % len(cards)]:
        st.metric(
            f"{c.code}: {c.name}",
            f"{_fmt(s.current_grade)} {s.current_letter.letter}" if s.has_grades else "--",
            help=f"Target {c.target_grade:g}% · {s.total_weight:.0f}% complete",
        )

selected_id = st.selectbox(
    "Open course",
    [c.id for c in courses],
    format_func=lambda cid: next(c.code for c in courses if c.id == cid),
)
course = next(c for c in courses if c.id == selected_id)
summary = course_summary(course)

st.markdown("---")
st.subheader(f"{course.name} ({course.code})")

with st.expander("Edit or delete course"):
    with st.form("edit_course_form"):
        e_name = st.text_input("Course name", value=course.name, key=f"course_name_{course.id}")
        e_code = st.text_input("Course code", value=course.code, key=f"course_code_{course.id}")
        e_target = st.number_input("Target grade", 0.0, 100.0, float(course.target_grade), step=0.5,
                                   key=f"course_target_{course.id}")
        palette = list(COURSE_COLORS.keys())
        e_color = st.selectbox("Colour", palette, index=palette.index(course.color),
                               format_func=lambda k: COURSE_COLORS[k][0], key=f"course_color_{course.id}")
        if st.form_submit_button("Update course", type="primary"):
            try:
                edited = edit_course(courses, course, name=e_name, code=e_code,
                                     target_grade=e_target, color=e_color)
            except GradeTrackerError as e:
                st.error(e.message)
            else:
                _save_course(edited)
                st.rerun()

    confirm = st.checkbox("I understand this course and its assignments will be removed",
                          key=f"confirm_delete_{course.id}")
    if st.button("Delete course", disabled=not confirm):
        st.session_state["courses"] = [c for c in courses if c.id != course.id]
        logger.info("Deleted course %s", course.code)
        st.rerun()

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Current grade", _fmt(summary.current_grade) if summary.has_grades else "--")
with col2:
    st.metric("Current letter", summary.current_letter.letter)
with col3:
    st.metric("Target", f"{summary.target_grade:g}% ({summary.target_letter.letter})")
with col4:
    st.metric("Complete", f"{summary.total_weight:.0f}%",
              help=f"{summary.remaining_weight:.0f}% remaining")
st.progress(summary.completion / 100)

if summary.required_final is None:
    st.info("Add assignments to see final exam requirements.")
elif summary.outlook.achievable:
    st.success(
        f"You need **{_fmt(summary.required_final)}** on the remaining "
        f"{summary.remaining_weight:.0f}% to reach your target grade."
    )
else:
    st.error(
        f"Needed: {_fmt(summary.required_final)}. "
        "Your target grade may not be achievable with the current grades."
    )

# ------------------------
# Assignments
# ------------------------

st.markdown("### Assignments")
rows = [
    {"Name": a.name, "Type": a.type, "Grade": a.grade, "Weight": a.weight, "Date": a.date}
    for a in assignments_by_date(course)
]
if rows:
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    picked_id = st.selectbox(
        "Edit or delete assignment",
        [None] + [a.id for a in course.assignments],
        key=f"pick_assignment_{course.id}",
        format_func=lambda aid: "-" if aid is None else next(a.name for a in course.assignments if a.id == aid),
    )
    if picked_id is not None:
        picked = next(a for a in course.assignments if a.id == picked_id)
        with st.form(f"edit_assignment_{picked.id}"):
            e1, e2, e3, e4, e5 = st.columns(5)
            with e1:
                e_name = st.text_input("Name", value=picked.name, key=f"a_name_{course.id}_{picked.id}")
            with e2:
                e_type = st.selectbox("Type", ASSIGNMENT_TYPES, index=ASSIGNMENT_TYPES.index(picked.type),
                                      key=f"a_type_{course.id}_{picked.id}")
            with e3:
                e_grade = st.number_input("Grade", 0.0, 100.0, float(picked.grade), step=0.5,
                                          key=f"a_grade_{course.id}_{picked.id}")
            with e4:
                e_weight = st.number_input("Weight", 0.0, 100.0, float(picked.weight), step=1.0,
                                           key=f"a_weight_{course.id}_{picked.id}")
            with e5:
                e_date = st.date_input("Date", value=picked.date, key=f"a_date_{course.id}_{picked.id}")

            if st.form_submit_button("Update assignment", type="primary"):
                budget = check_assignment_budget(course, e_weight, exclude_id=picked.id)
                if not budget.ok:
                    st.error(
                        f"Updating this assignment would exceed 100% total weight. "
                        f"Current: {budget.current_total:g}%, Available: {budget.available:g}%"
                    )
                else:
                    try:
                        edited = Assignment(id=picked.id, name=e_name, grade=e_grade,
                                            weight=e_weight, type=e_type, date=e_date)
                        _save_course(update_assignment(course, edited))
                    except GradeTrackerError as e:
                        st.error(e.message)
                    else:
                        st.rerun()

        if st.button("Delete assignment", key=f"delete_{course.id}_{picked.id}"):
            _save_course(remove_assignment(course, picked.id))
            st.rerun()

with st.form("assignment_form", clear_on_submit=True):
    st.markdown("**Add assignment**")
    a1, a2, a3, a4, a5 = st.columns(5)
    with a1:
        a_name = st.text_input("Name")
    with a2:
        a_type = st.selectbox("Type", ASSIGNMENT_TYPES, index=ASSIGNMENT_TYPES.index(DEFAULT_ASSIGNMENT_TYPE))
    with a3:
        a_grade = st.number_input("Grade", 0.0, 100.0, step=0.5)
    with a4:
        a_weight = st.number_input("Weight", 0.0, 100.0, step=1.0)
    with a5:
        a_date = st.date_input("Date", value=date.today())

    if st.form_submit_button("Add assignment", type="primary"):
        budget = check_assignment_budget(course, a_weight)
        if not budget.ok:
            st.error(
                f"Adding this assignment would exceed 100% total weight. "
                f"Current: {budget.current_total:g}%, Available: {budget.available:g}%"
            )
        else:
            try:
                new = Assignment(id=_next_id(course.assignments), name=a_name, grade=a_grade,
                                 weight=a_weight, type=a_type, date=a_date)
                _save_course(add_assignment(course, new))
            except GradeTrackerError as e:
                st.error(e.message)
            else:
                st.rerun()

uploaded = st.file_uploader("Or upload assignments CSV (Name, Grade, Weight, Type, Date)", type=["csv"])
if uploaded is not None and st.button("Import CSV"):
    try:
        imported = parse_assignments(
            validate_assignments_csv(read_csv_upload(uploaded)),
            start_id=_next_id(course.assignments),
        )
        updated = course
        for a in imported:
            updated = add_assignment(updated, a)
    except GradeTrackerError as e:
        st.error(f"CSV error: {e.message}")
    else:
        _save_course(updated)
        logger.info("Imported %d assignments into %s", len(imported), course.code)
        st.rerun()

# ------------------------
# Advanced calculator
# ------------------------

st.markdown("---")
st.subheader("Final grade calculator")
c1, c2 = st.columns(2)
with c1:
    desired = st.number_input("Desired course grade", 0.0, 100.0, float(course.target_grade), step=0.5)
with c2:
    final_weight = st.number_input("Final exam weight", 0.0, 100.0, float(summary.remaining_weight), step=1.0)

scenario = final_grade_scenario(course, desired, final_weight)
if scenario.required is None:
    st.info("Enter valid values to see results.")
else:
    st.metric("Required on final", _fmt(scenario.required))
    if scenario.outlook.achievable:
        st.success(scenario.outlook.value)
    else:
        st.error(scenario.outlook.value)
