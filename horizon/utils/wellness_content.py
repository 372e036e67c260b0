# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


# -------------------------
# Home screen
# -------------------------

AFFIRMATIONS = [
    "You are doing the best you can, and that is enough.",
    "You don't have to have it all figured out right now.",
    "You are allowed to rest. Rest is productive.",
    "You are stronger than the thoughts trying to bring you down.",
    "You have overcome so much already. You can face this too.",
    "You deserve peace, even on the busiest days.",
    "You are not behind. You are exactly where you need to be.",
    "You can breathe through this moment. Just one breath at a time.",
    "You are safe right now. Let your body soften.",
    "You are worthy of love and care, even from yourself.",
    "You don't need to carry it all alone. It's okay to ask for help.",
    "You are more than your worries. You are whole.",
    "You have permission to pause. Everything can wait.",
    "You are not a burden for feeling this way.",
    "You are allowed to feel all your emotions without judgment.",
    "You are capable of creating calm within the chaos.",
    "You matter, even on the days you feel invisible.",
    "You are growing through what you're going through.",
    "You have handled difficult things before. You will again.",
    "You are enough, just as you are.",
]

AFFIRMATION_INTERVAL_SECONDS = 5

LEARN_CARDS = [
    {
        "q": "What is anxiety, stress, and depression?",
        "a": "Anxiety is when your mind keeps worrying, even when nothing is wrong. Stress happens when "
             "you're under pressure and feel like things are too much. Depression is a lasting sadness "
             "that doesn't go away easily and affects how you live.",
    },
    {
        "q": "How to identify triggers?",
        "a": "Triggers are moments or thoughts that suddenly shift your mood. Notice what was happening "
             "before you felt anxious or sad. Writing it down helps you see patterns and learn how to "
             "handle them better.",
    },
    {
        "q": "What is therapy really like?",
        "a": "Therapy is a safe, private space to talk with a trained professional. It's not about being "
             "\"broken,\" but about learning tools to cope, express yourself, and feel lighter. Every "
             "session is based on trust and healing at your pace.",
    },
    {
        "q": "How to support a friend who's struggling?",
        "a": "Be there without judgment. Listen more than you speak, and offer reassurance like, \"I care "
             "about you.\" Avoid trying to \"fix\" them. Encourage them to talk to a professional and "
             "check in regularly so they don't feel alone.",
    },
    {
        "q": "Why track emotions?",
        "a": "Tracking your emotions helps you become more aware of what you're feeling and why. It shows "
             "you patterns over time, like what uplifts you and what drains you. This helps in managing "
             "emotions instead of feeling controlled by them.",
    },
    {
        "q": "How to build healthy boundaries?",
        "a": "Boundaries are limits that protect your mental health. It's okay to say no or take time for "
             "yourself. Healthy boundaries don't push people away. They help build stronger, more "
             "respectful relationships.",
    },
    {
        "q": "What are panic attacks?",
        "a": "Panic attacks are sudden waves of intense fear with physical symptoms like a rapid heartbeat. "
             "They can feel terrifying but are not dangerous. Grounding exercises and deep breathing can "
             "help you stay calm.",
    },
    {
        "q": "Difference between a psychologist, therapist, and psychiatrist?",
        "a": "A therapist helps you cope via talk sessions. A psychologist also does therapy and may "
             "conduct tests. A psychiatrist is a medical doctor who can prescribe medication if needed. "
             "All are here to support you.",
    },
    {
        "q": "Understanding your inner critic and self-compassion?",
        "a": "The inner critic is the voice that says you're not good enough. Self-compassion is learning "
             "to talk to yourself with kindness instead. Notice when you're being harsh and try saying "
             "something gentle, like you would to a friend.",
    },
]

# -------------------------
# Crisis support
# -------------------------

CRISIS_RESOURCES = [
    {"name": "Jeevan Aastha helpline (GJ)", "number": "1800-233-3330", "hours": "24x7"},
    {"name": "Aasra", "number": "09820466726", "hours": "24x7"},
    {"name": "Vandravela foundation", "number": "+91 9999666555", "hours": "24x7"},
    {"name": "Kiran mental health (govt)", "number": "1800-599-0019", "hours": "24x7"},
    {"name": "One life foundation", "number": "7893078930", "hours": "24x7"},
    {"name": "Sumaitri", "number": "011-46018404", "hours": "2pm-10pm"},
    {"name": "Fortis stress helpline", "number": "+91-8376804102", "hours": "24x7"},
    {"name": "I-CALL Psychosocial helpline (Tiss)", "number": "022-25521111", "hours": "10am - 8pm"},
    {"name": "Interventional bipolar foundation", "number": "+91-8888817666", "hours": "7am - 9pm"},
    {"name": "National institute of behavioural sciences Kolkata", "number": "033-22865203", "hours": "12pm - 8pm"},
    {"name": "CAN- Helper", "number": "09511948920", "hours": "10am - 6pm"},
    {"name": "Mann talks helpline (MH)", "number": "8686139139", "hours": "9am - 6pm"},
    {"name": "The institute of mental health(IMH)", "number": "9154154092 / 044-26425585", "hours": "24x7"},
    {"name": "NIMHANS centre for well-being", "number": "08026685948 / 9480829670", "hours": "Mon-Sat, 9am-4:30pm"},
]

# -------------------------
# Mood check
# -------------------------

MOOD_QUESTIONS = [
    "One good moment today?",
    "A word to describe your strength today?",
    "One hard moment today?",
    "A feeling you want to let go?",
    "What challenged you?",
    "Energy level right now?",
    "A small win today?",
    "One supportive person today?",
    "One intention for tomorrow?",
]
