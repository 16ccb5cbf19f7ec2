"""MentorHub: REST backend for mentors, mentees, sessions, documents and goals."""
