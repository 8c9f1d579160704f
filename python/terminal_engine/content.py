"""
Static narrative content for the terminal engine.
"""

from __future__ import annotations

from .models import AnswerOption, QuizQuestion


WELCOME_MESSAGE = "Welcome, Architect of the Future."

BOOT_LINES: tuple[str, ...] = (
    "INITIALIZING SWITCHUP_KERNEL...",
    "LOADING MODULES: [AI_AGENT, WORKFLOW_ENGINE, DOM_PARSER]",
    "CONNECTING TO NEON_DB [MAIN BRANCH]... SUCCESS",
    "VERIFYING USER_AGENTS... OK",
    "CHECKING SYSTEM INTEGRITY... 100%",
    "MOUNTING VIRTUAL FILESYSTEM...",
    "STARTING INTERFACE SERVICE...",
    "WELCOME, ARCHITECT OF THE FUTURE.",
)

AUTH_PROMPT_LINES: tuple[str, ...] = ("> AUTHENTICATION REQUIRED", "PASSWORD:")
ACCESS_DENIED_MESSAGE = "> ACCESS DENIED. TRY AGAIN."
ACCESS_GRANTED_MESSAGE = "ACCESS GRANTED."

SHUTDOWN_LINES: tuple[str, ...] = (
    "Terminating AI agents...",
    "Closing provider connections...",
    "Archiving workflow state...",
    "Shutting down Windmill engine...",
    "Disconnecting from Neon DB...",
    "Powering down systems...",
    "Goodbye. 👋",
)

QUIZ_INTRO_LINES: tuple[str, ...] = (
    "INITIALIZING CULTURE FIT DIAGNOSTIC...",
    'Answer A or B. Type "exit" to quit.',
)
QUIZ_TERMINATED_MESSAGE = "Quiz terminated."


def _question(
    number: int,
    prompt: str,
    option_a: str,
    option_b: str,
    on_correct: str,
    on_incorrect: str,
) -> QuizQuestion:
    return QuizQuestion(
        question_id=number,
        prompt=prompt,
        option_a=option_a,
        option_b=option_b,
        correct_option=AnswerOption.B,
        feedback_on_correct=on_correct,
        feedback_on_incorrect=on_incorrect,
    )


QUIZ_QUESTIONS: tuple[QuizQuestion, ...] = (
    _question(
        1,
        "You need to migrate 500 legacy integration files. The AI model gets it 80% right but hallucinates on edge cases.",
        "Trust but verify. Review every change to ensure correctness.",
        "Automate the reviewer. Build a secondary 'Linter Agent' to catch the hallucinations, then run the migration again.",
        "MATCH. Don't just write code. Build the system that writes the code.",
        "MISMATCH. Manual review scales linearly. We need exponential leverage.",
    ),
    _question(
        2,
        "The Roadmap says 'Build Feature X'. You discover 'X' won't solve the user's actual problem, but 'Y' (which is harder) will.",
        "Build 'X' to deliver on the roadmap promise. Consistency and predictability are key.",
        "Kill 'Feature X'. Write a one-pager on why we should build 'Y' and pivot immediately.",
        "MATCH. You are the Product Owner. The roadmap is a hypothesis, not a law.",
        "MISMATCH. We don't hire you to execute tickets. We hire you to solve problems.",
    ),
    _question(
        3,
        "We are launching a new vertical (Telco) that conflicts with our current data model (Energy).",
        "Spin up a separate 'Telco Service' to keep the 'Energy Core' clean and move fast.",
        "Refactor the Core to be 'Vertical-Agnostic', even if it delays the launch by a month.",
        "MATCH. We are building the 'Universal Adapter', not a collection of consulting projects.",
        "MISMATCH. Short-term speed that creates long-term fragmentation is not our way.",
    ),
    _question(
        4,
        "A critical 3rd-party API is undocumented and returns cryptic errors. Support isn't responding.",
        "Flag it as a blocker. Work on the next prioritized task until we get documentation.",
        "Reverse engineer the network traffic, trial-and-error the payload, and write the docs yourself.",
        "MATCH. The API is the truth. Documentation is just a hint.",
        "MISMATCH. 'Blocked' is a state of mind. There is always a way.",
    ),
    _question(
        5,
        "You are using an AI coding assistant, but it keeps generating subtle bugs in a complex module.",
        "Stop using it for this task. It's faster to just write it manually than to debug the AI.",
        "Pause. Refactor the context you are feeding it. Create a 'Planner' sub-agent to guide the 'Coder'.",
        "MATCH. If the AI fails, it's a prompting/context failure. Fix the inputs.",
        "MISMATCH. Blaming the tool doesn't scale. Mastering the tool does.",
    ),
    _question(
        6,
        "You shipped a new onboarding flow. How do you define success?",
        "Zero errors in production. The flow completed without exceptions.",
        "User activation increased by 30%. I know because I built the dashboard first.",
        "MATCH. Code that works but doesn't move metrics is just expensive art.",
        "MISMATCH. Technical excellence is necessary but not sufficient. We need business impact.",
    ),
    _question(
        7,
        "You discovered a better way to handle authentication. What do you do?",
        "Implement it in my domain. Others will notice and ask me about it later.",
        "Write a short doc, demo it in standup, and help others migrate their flows.",
        "MATCH. Knowledge hoarding creates silos. We win by cross-pollinating insights.",
        "MISMATCH. Individual excellence is good. Multiplying the team's capability is better.",
    ),
    _question(
        8,
        "You have an unproven hypothesis about automating a manual process. It might not work.",
        "Spec it out fully. Build a robust solution that handles all edge cases from day one.",
        "Build a 4-hour prototype that handles the happy path. Test with real users tomorrow.",
        "MATCH. Learn fast, fail cheap. Certainty comes from iteration, not planning.",
        "MISMATCH. Over-engineering unvalidated ideas is waste. We need experimental velocity.",
    ),
    _question(
        9,
        "The founder asks you to 'automate contract extraction'. What do you do first?",
        "Research OCR libraries and start a proof-of-concept with the most popular one.",
        "Ask: 'What decision does this enable?' and 'What happens if we get it wrong?'",
        "MATCH. The best code is code you don't write. Understand 'why' before 'how'.",
        "MISMATCH. Execution without context creates solutions searching for problems.",
    ),
    _question(
        10,
        "You see an opportunity to automate a painful manual process, but it's not on any roadmap.",
        "Propose it as a project for next quarter. Wait for prioritization and approval.",
        "Block out Friday afternoon. Ship a working prototype. Show the team Monday morning.",
        "MATCH. Product Engineers at SwitchUp create leverage, they don't wait for permission.",
        "MISMATCH. Initiative and ownership are core to our DNA. We need people who 'go rogue' to create value.",
    ),
)


# (level, message) pairs for the live log feed
LOG_MESSAGES: tuple[tuple[str, str], ...] = (
    ("SYSTEM", "Booting Switchup_OS kernel v2.4.0..."),
    ("INFO", "Scanning 12,403 inboxes for hidden price hikes..."),
    ("WARN", "E.ON portal DOM change detected. Initiating self-healing script v4.2."),
    ("SUCCESS", 'Intercepted price increase for User #9921. Auto-switched to "Green Energy 24". Saved €320/yr.'),
    ("INFO", "Agent [Switch-AI-01] negotiating with Telekom chatbot... [Attempt 3/5]"),
    ("SUCCESS", "Telekom chatbot conceded. Bandwidth upgrade approved."),
    ("WARN", "Legacy infrastructure detected: Provider requires FAX. Spooling virtual fax modem..."),
    ("INFO", 'Analyzing sentiment of support email from "Stadtwerke München". Tone: Passive-Aggressive.'),
    ("SYSTEM", 'Deploying "Universal Adapter" schema update to Neon branch "feat/telco-expansion".'),
    ("WARN", 'Detected "Dark Pattern" in cancellation flow (Button hidden in footer). Bypassing...'),
    ("SUCCESS", "Migrated 500 households from overpriced base plan in 200ms."),
    ("INFO", 'Re-calibrating LLM prompt for "German Bureaucracy" tone matching.'),
    ("WARN", "Competitor API rate limit hit. Switching to rotating proxy pool."),
    ("INFO", "Parsing 50GB of PDF invoices. OCR Confidence: 99.9%."),
    ("SYSTEM", 'Scaling Windmill workers to handle "End of Month" load spike.'),
    ("WARN", "Vattenfall API timeout (500ms). Retrying with exponential backoff..."),
    ("INFO", 'Detecting "Fake Green Energy" tariff. Filtering from recommendation engine.'),
    ("SUCCESS", 'Trust Level increased to 98% for Provider "Octopus Energy".'),
    ("INFO", 'Training new "Negotiator" model on 50k successful support chats.'),
    ("WARN", "Anomaly detected: 1und1 offering 0€ contract. Flagging for manual review."),
    ("SYSTEM", "Garbage collecting 1.2TB of temp PDF artifacts."),
    ("SUCCESS", "Bot [Switch-AI-07] successfully navigated 2FA challenge via SMS hook."),
    ("INFO", 'Calculating "Fairness Score" for 200 new energy tariffs.'),
    ("SYSTEM", 'Hot-patching "Universal Adapter" for new Vodafone API version.'),
    ("SUCCESS", "Reduced customer support load by 40% via proactive notification."),
    ("INFO", "Simulating 10,000 concurrent sign-ups for load testing."),
    ("WARN", 'Provider "Stromia" declared insolvency. Triggering Fairbraucherschutz sister organisation to step.'),
    ("SUCCESS", "Emergency switch complete. 15,000 users protected from outage."),
    ("INFO", 'Optimizing Postgres query plan for "Contract History" table.'),
    ("SYSTEM", "Deploying to edge: Frankfurt, Berlin, Munich."),
    ("WARN", 'Detected 150ms latency spike in "Check24" scraper. Investigating...'),
    ("SUCCESS", 'Found 12 "Zombie Subscriptions" for User #5501. Cancellation queued.'),
    ("INFO", "Generating monthly savings report for 150k users."),
    ("SYSTEM", "Backup complete. 50TB encrypted data stored in cold storage."),
    ("SUCCESS", "Legacy container active. Contract successfully terminated."),
    ("INFO", 'Analyzing "Terms & Conditions" change for 50 providers. Diffing legal text...'),
    ("WARN", "Hidden fee detected in footnote 12, section C. Alerting users."),
    ("SUCCESS", 'User #8821 feedback: "You guys are magic." forwarded to #general.'),
    ("SYSTEM", "Switchup_OS uptime: 99.999%. Systems nominal."),
    ("INFO", 'Scanning for "Loyalty Penalties" in 500,000 existing contracts.'),
    ("SUCCESS", 'Identified €1.2M in potential savings for "Sleeping" customers.'),
    ("INFO", 'Deploying new "Bill Shock" predictor model v3.1.'),
    ("SUCCESS", "Prevented 500 accidental auto-renewals this hour."),
    ("SYSTEM", 'Syncing "Universal Adapter" definitions with regulatory database.'),
    ("INFO", 'Analyzing user spending patterns: "Netflix" subscription unused for 6 months.'),
    ("SUCCESS", "User #3301 approved cancellation of unused gym membership via API."),
    ("WARN", 'Detected phishing attempt in user inbox pretending to be "DHL". Quarantined.'),
    ("SUCCESS", 'Automated 99.5% of "Address Change" requests today.'),
    ("SYSTEM", 'Scaling "Document Understanding" cluster to 500 nodes.'),
    ("WARN", 'Provider "Vattenfall" changed login flow. Captcha difficulty increased.'),
    ("SUCCESS", "Captcha solver updated. Success rate restored to 99.9%."),
    ("INFO", 'Monitoring "Gas Price Brake" legislation changes in real-time.'),
    ("SUCCESS", 'Applied "Price Brake" refund to 12,000 eligible contracts automatically.'),
    ("INFO", 'Detecting "Bundled" contracts (Internet + TV). Decoupling analysis...'),
    ("WARN", 'User #7712 attempting to switch to "Scam Energy Ltd". Intervention triggered.'),
    ("SUCCESS", 'User #7712 redirected to "Trusted Provider". Crisis averted.'),
    ("SYSTEM", 'Re-indexing "Tariff Knowledge Graph". 5 million nodes.'),
    ("INFO", 'Predicting "Churn Risk" for Provider X based on support wait times.'),
    ("SUCCESS", 'Negotiated "Retention Offer" for User #9912. -20% monthly fee.'),
    ("INFO", "Parsing handwritten meter reading from User #4021. AI Confidence: 95%."),
    ("WARN", 'Detected duplicate billing from "Telekom". Initiating dispute protocol.'),
    ("SUCCESS", "Dispute resolved. Credit note of €45.00 generated."),
    ("SYSTEM", 'Switchup_OS entering "High Efficiency" mode for night batch processing.'),
    ("SYSTEM", 'Coffee machine API: "Bean Hopper Empty". Alerting Office Manager.'),
    ("SUCCESS", 'User #4002 cancellation processed. Reason: "Moving to Mars". Contract paused.'),
    ("WARN", "User #10293 uploaded a photo of a cat instead of an invoice. Asking nicely for retry."),
    ("WARN", 'Provider portal requires "Internet Explorer 6". Spooling legacy container...'),
    ("WARN", "Provider \"O2\" API returning 418 I'm a teapot. Retrying..."),
    ("INFO", "Coffee machine needs descaling. Notifying Office Manager."),
    ("WARN", "Developer forgot to mock API. Sending real request to production... Just kidding."),
    ("SYSTEM", "Recruiting more engineers. Apply now via terminal."),
    ("INFO", "AI Agent [Switch-AI-02] is bored. Reading Wikipedia."),
    ("SUCCESS", 'Successfully ignored 500 spam emails about "SEO Optimization".'),
    ("WARN", 'Detected excessive usage of "console.log". Cleaning up...'),
    ("INFO", 'User #1337 asked for "The Answer to Life". Returning 42.'),
    ("SYSTEM", 'Updating "Swag Store" inventory. Hoodies are low.'),
    ("WARN", "Pizza delivery detected at front desk. Pausing deployment."),
    ("SUCCESS", "Found a missing semicolon in legacy code. Crisis averted."),
    ("INFO", 'Optimizing office playlist. Removing "Baby Shark".'),
    ("SYSTEM", "Checking if it is Friday... Result: false. Keep coding."),
)


QUIZ_SUMMARY_HEADER = "DIAGNOSTIC COMPLETE"

QUIZ_HIGH_LINES: tuple[str, ...] = (
    ">> COMPATIBILITY CONFIRMED ({percent}%)",
    "You have the mindset we're looking for.",
    "Initiating application sequence...",
    "Run apply to claim your spot.",
)

QUIZ_MIXED_LINES: tuple[str, ...] = (
    ">> MIXED SIGNALS DETECTED",
    "You have some of the traits we value, but there are gaps.",
    "Consider whether full ownership of ambiguous problem spaces excites or exhausts you.",
    "If you're energized by that challenge, let's talk anyway. Run apply.",
)

QUIZ_LOW_LINES: tuple[str, ...] = (
    ">> LOW ALIGNMENT DETECTED",
    "Based on these answers, Switchup likely won't make you happy.",
    "You might thrive in an environment with:",
    "  • Clear product specs and roadmaps",
    "  • Defined scope and predictable deliverables",
    "  • Separation between 'building' and 'deciding what to build'",
    "That's a valid choice. Different people thrive in different environments.",
)
