# canonical profile record (empty strings / lists – never None)
PROFILE_SCHEMA = {
    "name": "",
    "role": "",
    "bio": "",
    "summary": "",
    "email": "",
    "phone": "",
    "github": "",
    "linkedin": "",
    "skills": [],
    "projects": [],
}

PROJECT_SCHEMA = {"title": "", "description": "", "link": ""}

# regions a cloned page must expose once converted
SECTION_KEYS = ("name", "role", "bio", "skills", "projects", "email", "social")

# used for template previews
SAMPLE_PROFILE = {
    "name": "Alex Johnson",
    "role": "Full Stack Developer",
    "bio": (
        "Passionate developer with 5+ years of experience building scalable web "
        "applications. Love creating beautiful, functional experiences that solve "
        "real problems."
    ),
    "skills": "React, Node.js, TypeScript, Python, AWS, Docker, MongoDB, PostgreSQL, GraphQL, REST APIs",
    "email": "alex.johnson@email.com",
    "github": "alexjohnson",
    "linkedin": "alexjohnson",
    "projects": [
        {
            "title": "E-Commerce Platform",
            "description": (
                "Built a scalable e-commerce solution handling 10K+ daily users with "
                "React, Node.js, and MongoDB."
            ),
            "link": "https://github.com/alexjohnson/ecommerce",
        },
        {
            "title": "AI Task Manager",
            "description": (
                "Developed an intelligent task management app using React and the "
                "OpenAI API."
            ),
            "link": "https://github.com/alexjohnson/ai-tasks",
        },
        {
            "title": "Weather Dashboard",
            "description": (
                "Created a weather visualization dashboard with real-time data. Built "
                "with Next.js, TypeScript, and Tailwind CSS."
            ),
            "link": "https://github.com/alexjohnson/weather-dash",
        },
    ],
}
