"""
Static text blocks rendered by the terminal commands.
"""

from __future__ import annotations


CONTACT_ADDRESS = "future-colleagues@switchup.tech"

HELP_HEADER = "Available Commands:"
HELP_HINT = "Hint: There are hidden commands. Explore."

STACK_LINES: tuple[str, ...] = (
    "TECH_STACK_V2 :: ENGINEERING DECISIONS",
    "\"Can I challenge this?\" — Yes. Always. That's the point.",
    "",
    "[ORCHESTRATION] Windmill.dev",
    "    Why: Self-hostable, TypeScript-native, built-in secrets",
    "    Alternative: Temporal (beautiful architecture, but we're not Google)",
    "    Current: 247 flows, 12k executions/day",
    "    Fun fact: We've contributed 3 PRs back to Windmill. Open source is a two-way street.",
    "",
    "[DATABASE] Neon (Postgres)",
    "    Why: Serverless Postgres with branching (test schema changes like git!)",
    "    Alternative: Supabase (we needed more control over connection pooling)",
    "    Current: 8ms p95 latency, auto-scales to zero (saving €€€ at 3am)",
    "    \"But why not just Postgres?\" — Valid question. Let's argue about it.",
    "",
    "[BROWSER] Playwright",
    "    Why: Multi-browser, network interception, stealth mode (shhh)",
    "    Alternative: Puppeteer (we love you, but Microsoft won this round)",
    "    Current: 150+ provider logins/day (yes, we pretend to be users)",
    "    Challenge: E.ON changed their login flow. We reverse-engineered it in 4 hours.",
    "",
    "[INTELLIGENCE] Gemini 3 Ultra / Claude Code",
    "    Why: 1M token context (entire codebases), multi-modal (PDF/Fax parsing)",
    "    Alternative: GPT-4 (rate limits killed us during batch processing)",
    "    Current: 5k docs/day, 99.2% accuracy (better than most humans)",
    "    We use AI to write code. Yes, really. Claude Code + sub-agents = 3x velocity.",
    "",
    "[OBSERVABILITY] Langfuse",
    "    Why: LLM-native tracing, cost tracking, prompt versioning",
    "    Alternative: LangSmith (vendor lock-in scared us)",
    "    Current: 200k LLM calls/week, €2.3k/month spend (we track every penny)",
    "    Our admins A/B test prompts. Non-technical people debugging AI. Wild.",
    "",
    "This stack was chosen for velocity, not popularity.",
    "We optimize for \"can we ship this week?\" not \"will this be on HackerNews?\"",
)

MISSION_LINES: tuple[str, ...] = (
    "MISSION :: THE UNIVERSAL ADAPTER",
    "(aka \"Why we exist and why you should care\")",
    "",
    "PROBLEM:",
    "    Switching subscriptions = 45-90 day bureaucratic nightmares.",
    "    Lost paperwork, manual headaches, user frustration.",
    "    Real user quote: \"I'd rather stay with my expensive provider than deal with this again.\"",
    "",
    "ROOT CAUSE:",
    "    Every provider = different API, process, legacy system (fax machines in 2025, yes really).",
    "    No one has built the abstraction layer. Until now.",
    "    Fun fact: We reverse-engineered E.ON's portal because their API docs were... creative fiction.",
    "",
    "OUR VISION:",
    "    Build the \"Stripe for Subscriptions\".",
    "    Universal Adapter: ANY subscription, ANY user, ANY market.",
    "    ONE codebase. ZERO hardcoded provider logic. Pure abstraction bliss.",
    "",
    "CURRENT STATE:",
    "    ✓ Energy (DE): 15k switches/mo, 7-day avg (down from 45)",
    "    ✓ E.ON Bot: 98% success (reverse-engineered, battle-tested)",
    "    ⚠ Telco (DE): Pilot, launching Q1 (this is your job)",
    "    ⏳ Insurance: Scoping (dragons lurk here)",
    "    ⏳ International: UK energy research (Brexit made this... interesting)",
    "",
    "NEXT MILESTONE:",
    "    Ship \"Vertical-Agnostic\" core (Energy + Telco in same system).",
    "    Don't build 10 separate bots.",
    "    Build the system that generates the bots.",
    "    (Meta-engineering. Your favorite kind, right?)",
    "",
    "Honest take: This is hard. We don't have all the answers.",
    "But we're figuring it out, and we want you in the room when we do.",
)

CHALLENGES_LINES: tuple[str, ...] = (
    "ARCHITECTURAL CHALLENGES",
    "1. The Universal Adapter:",
    "    Moving from \"Energy in Germany\" to \"Any Subscription Globally\". "
    "How do we abstract provider logic so the core system is agnostic?",
    "2. Configurable vs. Robust:",
    "    We need to launch new markets in weeks, not months. "
    "How do we build a system that is highly configurable but doesn't break under edge cases?",
)

LS_LINES: tuple[str, ...] = (
    "total 47 files (and counting)",
    "drwxr-xr-x  .git/                    (3 months of commits, some regrettable)",
    "-rw-r--r--  README.md                2.3kb   \"How to ship your first flow\"",
    "-rw-r--r--  job-description.md       8.1kb   You are here 👋",
    "-rwxr-xr-x  apply.sh                 127b    Your future starts here",
    "drwxr-xr-x  flows/",
    "  -rw-r--r--  eon-bot.ts             4.2kb   The legendary reverse-eng (ask us about this)",
    "  -rw-r--r--  telco-adapter.ts       2.8kb   WIP: Universal pattern v1 (your playground)",
    "  -rw-r--r--  doc-parser.ts          3.1kb   Gemini + Vision pipeline (99.2% accuracy!)",
    "  -rw-r--r--  fax-handler.ts         1.9kb   Yes, fax. In 2025. Don't @ us.",
    "drwxr-xr-x  core/",
    "  -rw-r--r--  universal-adapter.ts   BROKEN  This is your job (seriously)",
    "  # TODO: Make this work for Energy + Telco without if/else hell",
    "drwxr-xr-x  monitoring/",
    "  -rw-r--r--  langfuse-traces.ts     1.4kb   LLM observability (we debug AI like code)",
    "  -rw-r--r--  alerting.ts            892b    Slack webhooks (3am pings, yay!)",
    "-rw-r--r--  .env                     REDACTED (nice try)",
    "-rw-r--r--  docker-compose.yml       1.1kb   Local dev setup",
    "-rw-r--r--  package.json             2.9kb   23 deps (we keep it light)",
    "drwxr-xr-x  docs/",
    "  -rw-r--r--  decisions.md           5.2kb   Our architectural decision log",
    "  -rw-r--r--  failures.md            3.8kb   Things that didn't work",
)

WHOAMI_HEADER_LINES: tuple[str, ...] = (
    "USER: guest@switchup.tech",
    "ROLE: Potential Product Engineer (soon-to-be legend?)",
    "STATUS: Evaluating cultural fit...",
)

WHOAMI_BODY_LINES: tuple[str, ...] = (
    "",
    "PERMISSIONS:",
    "    ✓ Read job description (you've earned it)",
    "    ✓ Explore tech stack (dig deep, we dare you)",
    "    ✓ Run culture diagnostic (prepare to be challenged)",
    "    ✓ Challenge our decisions (we love to be inspired)",
    "    ✗ Access production (requires: employee_status + 2FA + trust_level_9000)",
    "    ✗ Merge to main (requires: passed code review + sacrifice to the CI gods)",
    "",
    "MATCH PROFILE:",
    "Core traits we're looking for:",
    "1. Deep Engineering + Builder DNA",
    "    You've seen failures. You learn from them. Others learn from you.",
    "2. AI Mastery (The Multiplier)",
    "    You're genuinely excited about AI as a force multiplier, not a buzzword.",
    "    You know how to engineer the right context for AI, design agent workflows, debug LLM failures.",
    "    You experiment with new models in your spare time because you can't help yourself.",
    "3. Positive Can-Do Mindset",
    "    \"How can we make this work?\" not \"Why this won't work.\"",
    "    Blockers are puzzles to solve, not excuses to wait.",
    "4. Mission-Driven Impact",
    "    You care deeply about making a real difference in people's lives.",
    "    Our North Star: Building lifelong relationships with our users.",
    "    Current stat: Near-zero churn (despite our product's imperfections).",
    "    That's the magic. Building something that truly matters and might flip an entire (dysfunctional) market.",
    "",
    "Not a match if you're:",
    "    • Someone who needs detailed specs",
    "    • A \"that's not my job\" person",
    "    • Skeptical of AI or treating it as hype",
    "    • Optimizing for resume bullets over growth & learning",
    "",
    "You might be our person if:",
    "    ✓ You've \"gone rogue\" to ship value at a previous job",
    "    ✓ You've reverse-engineered a vendor's undocumented API",
    "    ✓ You care more about impact than code purity",
    "    ✓ You're building AI side projects because it's genuinely fun",
    "    ✓ You want to wake up knowing your work matters to real people",
    "",
    "Run 'culture' to see if we're a match. (Spoiler: It's harder than LeetCode, but more fun.)",
)

SUDO_LINES: tuple[str, ...] = (
    "[sudo] password for guest:",
    "Permission denied. (Did you really think that would work?)",
    "",
    "You need to be hired first. Three paths:",
    "1. Run './apply.sh' (email us directly, old school)",
    "2. Click 'Initialize Application' (fancy modal, same result)",
    "3. Keep exploring, find easter eggs, impress us",
    "",
    "Protip: We actually read every application. No AI screening here (ironic, we know).",
)

APPLY_LINES: tuple[str, ...] = (
    "Initiating application protocol...",
    f"Email us: mailto:{CONTACT_ADDRESS}",
)

KONAMI_LINES: tuple[str, ...] = (
    "🎮 Achievement Unlocked: \"Konami Commander\"",
    "You know the classics. We like that.",
    "+30 Culture Fit Points",
)

HEALTH_LINES: tuple[str, ...] = (
    "🏥 Experimenting...",
    "Fun fact: We not only experiment with our ways of working, "
    "but also with innovative approaches to supporting health.",
)

MATRIX_LINES: tuple[str, ...] = (
    "Wake up, Neo...",
    "The subscription matrix has you.",
    "Follow the white terminal prompt.",
)

HIRE_ME_LINES: tuple[str, ...] = (
    "🚀 Confidence detected. We like it.",
    "Run apply to make it official.",
)

SHUTDOWN_NOTICE_LINES: tuple[str, ...] = (
    "INITIATING SHUTDOWN SEQUENCE...",
    "Disconnecting neural links...",
    "Saving session state...",
    "Warning: Unsaved applications will be lost.",
    "See you on the inside. 🚀",
)
