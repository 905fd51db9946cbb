#!/usr/bin/env python3
"""
Seed Script

Clears the database and loads demo users, jobs and applications.
All demo accounts use the password 123456.

Run: python scripts/seed.py
"""
import sys
sys.path.insert(0, '.')

from datetime import datetime, timedelta, timezone

from jobboard.core.config import get_settings
from jobboard.db.mongodb import COLLECTIONS, create_mongo_client, get_database, init_mongo_indexes
from jobboard.schemas.schemas import ApplicationStatus, ApplicationUpdate, JobCreate, RegisterRequest
from jobboard.services.application_service import ApplicationService
from jobboard.services.job_service import JobService
from jobboard.services.user_service import UserService

DEMO_PASSWORD = "123456"

RECRUITER = ("Priya Sharma", "recruiter@test.com")
APPLICANTS = [
    ("Arjun Patel", "applicant@test.com", "+91 98765 43210", 6, "Software Engineer"),
    ("Ananya Reddy", "ananya.reddy@email.com", "+91 98765 43211", 4, "Data Analyst"),
    ("Vikram Singh", "vikram.singh@email.com", "+91 98765 43212", 3, "DevOps Engineer"),
    ("Neha Gupta", "neha.gupta@email.com", "+91 98765 43213", 5, "Product Designer"),
]

JOBS = [
    {
        "title": "Senior Software Engineer - Full Stack",
        "description": "Develop scalable web applications, mentor junior developers "
                       "and contribute to architectural decisions.",
        "requirements": "5+ years of experience in software development\n"
                        "Strong proficiency in JavaScript, React, Node.js and MongoDB",
        "location": "Bangalore, Karnataka",
        "days_open": 30,
    },
    {
        "title": "Data Scientist - Machine Learning",
        "description": "Analyze large datasets, build predictive models and deploy ML "
                       "solutions that drive business decisions.",
        "requirements": "3-5 years of experience in data science/ML\n"
                        "Proficiency in Python, TensorFlow/PyTorch",
        "location": "Hyderabad, Telangana",
        "days_open": 30,
    },
    {
        "title": "Product Manager - FinTech",
        "description": "Lead our digital payment products with engineering, design and "
                       "business teams.",
        "requirements": "4-6 years of product management experience",
        "location": "Mumbai, Maharashtra",
        "days_open": 45,
    },
    {
        "title": "DevOps Engineer - Cloud Infrastructure",
        "description": "Manage cloud infrastructure and CI/CD pipelines, automate "
                       "deployments and keep systems reliable.",
        "requirements": "3-5 years of DevOps experience\nDocker, Kubernetes, Terraform",
        "location": "Pune, Maharashtra",
        "days_open": 30,
    },
]

# (applicant index, job index, status)
APPLICATIONS = [
    (0, 0, ApplicationStatus.INTERVIEW),
    (1, 1, ApplicationStatus.UNDER_REVIEW),
    (2, 3, ApplicationStatus.APPLIED),
    (3, 2, ApplicationStatus.OFFER),
    (0, 3, ApplicationStatus.REJECTED),
]


def main():
    settings = get_settings()
    client = create_mongo_client(settings)
    db = get_database(client, settings)

    print("Clearing existing data...")
    for name in COLLECTIONS.values():
        db[name].delete_many({})
    init_mongo_indexes(db)

    users = UserService(db)
    jobs = JobService(db)
    applications = ApplicationService(db)

    recruiter = users.register(RegisterRequest(
        name=RECRUITER[0], email=RECRUITER[1], password=DEMO_PASSWORD, role="recruiter"
    ))
    applicants = [
        users.register(RegisterRequest(name=name, email=email, password=DEMO_PASSWORD, role="applicant"))
        for name, email, *_ in APPLICANTS
    ]
    print(f"    ✅ Created {1 + len(applicants)} users")

    now = datetime.now(timezone.utc)
    created_jobs = []
    for posting in JOBS:
        fields = {k: v for k, v in posting.items() if k != "days_open"}
        job = jobs.create(
            JobCreate(**fields, deadline=now + timedelta(days=posting["days_open"])),
            recruiter["_id"],
        )
        created_jobs.append(job)
    print(f"    ✅ Created {len(created_jobs)} jobs")

    for applicant_idx, job_idx, status in APPLICATIONS:
        name, email, phone, years, role = APPLICANTS[applicant_idx]
        application = applications.create(
            {
                "jobId": created_jobs[job_idx]["_id"],
                "applicantName": name,
                "applicantEmail": email,
                "applicantPhone": phone,
                "yearsOfExperience": years,
                "currentRole": role,
                "coverLetter": f"I'd love to join as {created_jobs[job_idx]['title']}.",
            },
            applicants[applicant_idx]["_id"],
        )
        if status != ApplicationStatus.APPLIED:
            applications.update(application["_id"], ApplicationUpdate(status=status), recruiter["_id"])
    print(f"    ✅ Created {len(APPLICATIONS)} applications")

    client.close()
    print("\nDemo accounts (password: 123456):")
    print(f"    Recruiter: {RECRUITER[1]}")
    print(f"    Applicant: {APPLICANTS[0][1]}")


if __name__ == "__main__":
    main()
