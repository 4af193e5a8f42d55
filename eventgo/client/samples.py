"""Placeholder listings shown when the live catalog is empty."""

SAMPLE_EVENTS = [
    {
        "id": "sample-e1",
        "college_id": "sample-c1",
        "title": "TechFest 2026 - Annual Technical Festival",
        "short_description": "Join the biggest tech fest with coding competitions, robotics, and more!",
        "description": "Annual technical festival featuring coding competitions, robotics, workshops, "
                       "and guest lectures from industry experts.",
        "venue": "Main Campus",
        "city": "Mumbai",
        "start_date": "2026-02-15T09:00:00Z",
        "end_date": "2026-02-17T18:00:00Z",
        "is_free": False,
        "base_price": 299,
        "status": "published",
        "tags": ["Tech", "Coding", "Robotics"],
        "is_featured": True,
        "view_count": 1250,
        "college": {"id": "sample-c1", "name": "IIT Bombay", "city": "Mumbai", "is_verified": True},
    },
    {
        "id": "sample-e2",
        "college_id": "sample-c2",
        "title": "Innovate 2026 - Startup Summit",
        "short_description": "Connect with investors, pitch your ideas, and learn from successful founders.",
        "description": "A two-day summit bringing together aspiring entrepreneurs, successful founders, and investors.",
        "venue": "Convention Center",
        "city": "Bangalore",
        "start_date": "2026-03-01T10:00:00Z",
        "end_date": "2026-03-02T17:00:00Z",
        "is_free": True,
        "base_price": 0,
        "status": "published",
        "tags": ["Startup", "Innovation", "Networking"],
        "is_featured": True,
        "view_count": 890,
        "college": {"id": "sample-c2", "name": "IISc Bangalore", "city": "Bangalore", "is_verified": True},
    },
]

SAMPLE_JOBS = [
    {
        "id": "sample-j1",
        "title": "Full Stack Developer",
        "type": "job",
        "description": "Build and maintain web applications. Work with modern tech stack including "
                       "React, Node.js, and PostgreSQL.",
        "location": "Mumbai",
        "is_remote": False,
        "salary_min": 800000,
        "salary_max": 1500000,
        "salary_currency": "INR",
        "skills_required": ["JavaScript", "React", "PostgreSQL", "AWS"],
        "experience_level": "1-3 Years",
        "is_active": True,
        "is_featured": True,
        "is_external": False,
        "company": {"id": "sample-co2", "name": "StartupXYZ", "is_verified": True},
    },
    {
        "id": "sample-j2",
        "title": "Backend Engineer",
        "type": "job",
        "description": "Design and implement scalable backend services. "
                       "Experience with microservices architecture required.",
        "location": "Bangalore",
        "is_remote": True,
        "salary_min": 1200000,
        "salary_max": 2000000,
        "salary_currency": "INR",
        "skills_required": ["Java", "Spring Boot", "Kubernetes", "MongoDB"],
        "experience_level": "2-5 Years",
        "is_active": True,
        "is_featured": True,
        "is_external": False,
        "company": {"id": "sample-co3", "name": "CloudScale Systems", "is_verified": True},
    },
]

SAMPLE_INTERNSHIPS = [
    {
        "id": "sample-i1",
        "title": "Software Engineer Intern",
        "type": "internship",
        "description": "Join our engineering team to work on cutting-edge products. "
                       "Learn from experienced engineers and contribute to real projects.",
        "location": "Bangalore",
        "is_remote": True,
        "salary_min": 25000,
        "salary_max": 40000,
        "salary_currency": "INR",
        "skills_required": ["React", "TypeScript", "Node.js"],
        "experience_level": "Entry Level",
        "deadline": "2026-02-28T23:59:59Z",
        "is_active": True,
        "is_featured": True,
        "is_external": False,
        "company": {"id": "sample-co1", "name": "TechCorp India", "is_verified": True},
    },
    {
        "id": "sample-i2",
        "title": "Data Science Intern",
        "type": "internship",
        "description": "Work with the analytics team on real datasets and production ML models.",
        "location": "Hyderabad",
        "is_remote": False,
        "salary_min": 30000,
        "salary_max": 45000,
        "salary_currency": "INR",
        "skills_required": ["Python", "Machine Learning", "SQL"],
        "experience_level": "Entry Level",
        "is_active": True,
        "is_featured": False,
        "is_external": False,
        "company": {"id": "sample-co4", "name": "DataMinds Analytics", "is_verified": True},
    },
]

SAMPLE_HACKATHONS = [
    {
        "id": "sample-h1",
        "title": "HackIndia 2026",
        "type": "hackathon",
        "description": "48-hour national hackathon with prizes worth 10 Lakhs. Build solutions for real-world problems.",
        "location": "Delhi",
        "is_remote": False,
        "deadline": "2026-03-15T23:59:59Z",
        "skills_required": ["Problem Solving", "Coding", "Innovation"],
        "experience_level": "All Levels",
        "is_active": True,
        "is_featured": True,
        "is_external": True,
        "external_source": "Unstop",
        "external_url": "https://unstop.com",
        "salary_currency": "INR",
    },
    {
        "id": "sample-h2",
        "title": "Smart India Hackathon 2026",
        "type": "hackathon",
        "description": "India's biggest hackathon. Solve government challenges and win exciting prizes.",
        "location": "Multiple Cities",
        "is_remote": False,
        "deadline": "2026-04-01T23:59:59Z",
        "skills_required": ["Coding", "Hardware", "Design"],
        "experience_level": "All Levels",
        "is_active": True,
        "is_featured": True,
        "is_external": True,
        "external_source": "SIH",
        "external_url": "https://sih.gov.in",
        "salary_currency": "INR",
    },
]
