"""
Read-only heuristic tables shared by the résumé extractor.

SKILL_RULES is ordered: detected skills come out in table order. Short or
ambiguous tokens carry explicit look-arounds (C vs C++/C#/CSS, Go vs "go",
R vs the letter r).
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SkillRule:
    label: str
    detector: re.Pattern[str]


def _rule(label: str, pattern: str) -> SkillRule:
    return SkillRule(label, re.compile(pattern, re.I))


SKILL_RULES: tuple[SkillRule, ...] = (
    # languages
    _rule("JavaScript", r"\bjavascript\b"),
    _rule("TypeScript", r"\btypescript\b"),
    _rule("Python", r"\bpython\b"),
    _rule("Java", r"\bjava\b(?!\s*script)"),
    _rule("C++", r"\bc\+\+"),
    _rule("C#", r"\bc#"),
    _rule("C", r"\bc\b(?!\+|#|s|o)"),
    _rule("PHP", r"\bphp\b"),
    _rule("Ruby", r"\bruby\b"),
    _rule("Go", r"\bgolang\b|\bgo\s*lang\b|\bgo\b(?=\s*[,;|•\n])"),
    _rule("Rust", r"\brust\b"),
    _rule("Swift", r"\bswift\b"),
    _rule("Kotlin", r"\bkotlin\b"),
    _rule("R", r"\br\b(?=\s*[,;|•\n(]|\s+programming|\s+language|\s+studio)"),
    _rule("MATLAB", r"\bmatlab\b"),
    _rule("Dart", r"\bdart\b"),
    _rule("Scala", r"\bscala\b"),
    _rule("Perl", r"\bperl\b"),
    _rule("Haskell", r"\bhaskell\b"),
    # frontend
    _rule("React", r"\breact(\.?js)?\b"),
    _rule("Angular", r"\bangular(\.?js)?\b"),
    _rule("Vue.js", r"\bvue(\.?js)?\b"),
    _rule("Next.js", r"\bnext(\.?js)?\b"),
    _rule("Svelte", r"\bsvelte\b"),
    _rule("HTML", r"\bhtml5?\b"),
    _rule("CSS", r"\bcss3?\b"),
    _rule("Tailwind CSS", r"\btailwind\b"),
    _rule("Bootstrap", r"\bbootstrap\b"),
    _rule("SASS", r"\bsass\b|\bscss\b"),
    _rule("jQuery", r"\bjquery\b"),
    # backend
    _rule("Node.js", r"\bnode(\.?js)?\b"),
    _rule("Express", r"\bexpress(\.?js)?\b"),
    _rule("Django", r"\bdjango\b"),
    _rule("Flask", r"\bflask\b"),
    _rule("FastAPI", r"\bfastapi\b"),
    _rule("Spring Boot", r"\bspring\s*boot\b"),
    _rule("Spring", r"\bspring\b(?!\s*boot)"),
    _rule("Laravel", r"\blaravel\b"),
    _rule("ASP.NET", r"\basp\.?net\b"),
    _rule("Ruby on Rails", r"\brails\b|\bruby on rails\b"),
    # databases
    _rule("MongoDB", r"\bmongodb\b|\bmongo\b"),
    _rule("PostgreSQL", r"\bpostgres(ql)?\b"),
    _rule("MySQL", r"\bmysql\b"),
    _rule("SQLite", r"\bsqlite\b"),
    _rule("SQL", r"\bsql\b(?!ite)"),
    _rule("Redis", r"\bredis\b"),
    _rule("Firebase", r"\bfirebase\b"),
    _rule("Supabase", r"\bsupabase\b"),
    _rule("DynamoDB", r"\bdynamodb\b"),
    _rule("Cassandra", r"\bcassandra\b"),
    _rule("Oracle", r"\boracle\b"),
    # cloud & devops
    _rule("AWS", r"\baws\b"),
    _rule("Azure", r"\bazure\b"),
    _rule("GCP", r"\bgcp\b|\bgoogle cloud\b"),
    _rule("Docker", r"\bdocker\b"),
    _rule("Kubernetes", r"\bkubernetes\b|\bk8s\b"),
    _rule("Jenkins", r"\bjenkins\b"),
    _rule("CI/CD", r"\bci/?cd\b"),
    _rule("Terraform", r"\bterraform\b"),
    _rule("Ansible", r"\bansible\b"),
    _rule("Nginx", r"\bnginx\b"),
    _rule("Heroku", r"\bheroku\b"),
    _rule("Vercel", r"\bvercel\b"),
    _rule("Netlify", r"\bnetlify\b"),
    # tools
    _rule("Git", r"\bgit\b(?!hub|lab)"),
    _rule("GitHub", r"\bgithub\b"),
    _rule("GitLab", r"\bgitlab\b"),
    _rule("Linux", r"\blinux\b"),
    _rule("Figma", r"\bfigma\b"),
    _rule("Photoshop", r"\bphotoshop\b"),
    _rule("VS Code", r"\bvs\s*code\b|\bvisual studio code\b"),
    _rule("Postman", r"\bpostman\b"),
    _rule("JIRA", r"\bjira\b"),
    _rule("Webpack", r"\bwebpack\b"),
    _rule("Vite", r"\bvite\b"),
    # data / ml
    _rule("Machine Learning", r"\bmachine\s*learning\b"),
    _rule("Deep Learning", r"\bdeep\s*learning\b"),
    _rule("TensorFlow", r"\btensorflow\b"),
    _rule("PyTorch", r"\bpytorch\b"),
    _rule("Scikit-Learn", r"\bscikit\b|\bsklearn\b"),
    _rule("Pandas", r"\bpandas\b"),
    _rule("NumPy", r"\bnumpy\b"),
    _rule("Data Science", r"\bdata\s*science\b"),
    _rule("NLP", r"\bnlp\b|\bnatural language processing\b"),
    _rule("Computer Vision", r"\bcomputer\s*vision\b"),
    _rule("OpenCV", r"\bopencv\b"),
    _rule("Tableau", r"\btableau\b"),
    _rule("Power BI", r"\bpower\s*bi\b"),
    _rule("Excel", r"\bexcel\b"),
    # mobile
    _rule("Flutter", r"\bflutter\b"),
    _rule("React Native", r"\breact\s*native\b"),
    _rule("Android", r"\bandroid\b"),
    _rule("iOS", r"\bios\b"),
    # other
    _rule("GraphQL", r"\bgraphql\b"),
    _rule("REST API", r"\brest\s*(ful)?\s*api\b|\brest\b"),
    _rule("WebSocket", r"\bwebsocket\b"),
    _rule("Blockchain", r"\bblockchain\b"),
    _rule("Solidity", r"\bsolidity\b"),
    _rule("Web3", r"\bweb3\b"),
    _rule("Agile", r"\bagile\b"),
    _rule("Scrum", r"\bscrum\b"),
    _rule("Three.js", r"\bthree\.?js\b"),
    _rule("Socket.io", r"\bsocket\.?io\b"),
    _rule("Mongoose", r"\bmongoose\b"),
    _rule("Prisma", r"\bprisma\b"),
    _rule("OAuth", r"\boauth\b"),
    _rule("JWT", r"\bjwt\b"),
)


def match_skills(text: str) -> List[str]:
    """Labels of every rule that fires on text, in table order, no repeats."""
    found: List[str] = []
    for rule in SKILL_RULES:
        if rule.label not in found and rule.detector.search(text or ""):
            found.append(rule.label)
    return found


# ───────────────────────────────────────── résumé layout ──
ROLE_KEYWORDS = (
    "Developer", "Engineer", "Designer", "Manager", "Analyst", "Architect",
    "Consultant", "Intern", "Scientist", "Researcher", "Administrator",
    "Lead", "Director", "Specialist", "Coordinator", "Programmer",
    "Full Stack", "Frontend", "Backend", "DevOps", "Data", "Machine Learning",
    "AI", "Software", "Web", "Mobile", "Cloud", "Security", "QA", "UI/UX",
)

# a line that merely *starts* like a header is never a name or a role
SECTION_HEADER = re.compile(
    r"^(summary|about|profile|objective|experience|education|skills|projects|"
    r"work|certif|contact|interests|hobbies|achievements|awards|languages|references)",
    re.I,
)

# any of these (short) lines closes the section before it
SECTION_BOUNDARY = re.compile(
    r"^(summary|about\s*me|about|profile|objective|professional\s*summary|"
    r"career\s*summary|experience|work\s*experience|professional\s*experience|"
    r"education|academic|skills|technical\s*skills|core\s*competencies|projects|"
    r"personal\s*projects|certif|contact|interests|hobbies|achievements|awards|"
    r"languages|references|publications)",
    re.I,
)

BIO_HEADERS = (
    "summary", "about me", "about", "profile", "objective",
    "professional summary", "career summary", "career objective",
)
SKILL_HEADERS = (
    "skills", "technical skills", "core competencies", "technologies",
    "tech stack", "tools",
)
PROJECT_HEADERS = (
    "projects", "personal projects", "academic projects", "key projects",
    "notable projects", "selected projects",
)

# project lines opening with these describe work, they are not titles
ACTION_VERBS = (
    "Built", "Developed", "Created", "Implemented", "Designed", "Used",
    "Utilized", "Leveraged", "Integrated", "Achieved", "Reduced", "Improved",
    "Managed", "Led", "Collaborated", "Conducted",
)
