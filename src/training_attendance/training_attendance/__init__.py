"""Training Attendance package.

Attendance sessions for field trainings: trainers open short-lived check-in
sessions, trainees join by code, and the roster is polled back to the trainer.
Organized by feature modules (sessions, attendance, joining, roster) with a
thin Flask controller layer over service/repository layers.
"""
