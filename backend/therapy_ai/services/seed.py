# backend/therapy_ai/services/seed.py
"""Demo data loaded into an empty store."""
from __future__ import annotations
import logging

from therapy_ai.schemas import Child, ChatMessage, Therapist, User
from therapy_ai.store import KeyValueStore, CHILDREN_KEY, THERAPISTS_KEY, USERS_KEY, chat_key
from therapy_ai.services.user_service import list_users
from therapy_ai.services.utils import calc_age_years, gen_id, iso_ago, now_iso

logger = logging.getLogger(__name__)

DAY = 24 * 60 * 60

SEED_ADMIN = {
    "name": "Dr. Amanda Richardson",
    "email": "admin@demo.com",
    "password": "admin123",
}

# (name, email, password, created N days ago)
SEED_THERAPISTS = [
    ("Sarah Lewis", "therapist@demo.com", "therapist123", 0),
    ("Dr. Michael Chen", "michael.chen@demo.com", "therapist456", 15),
    ("Jessica Martinez", "jessica.martinez@demo.com", "therapist789", 30),
]

SEED_CHILDREN = [
    {
        "therapist": 0,
        "updated_days_ago": 2,
        "name": "Emma Johnson",
        "dob": "2018-03-15",
        "category": "Communication",
        "concern": "Speech delay and articulation difficulties with /r/ and /s/ sounds",
        "guardian": "Jennifer Johnson (mother), Phone: (555) 123-4567",
        "notes": "Emma is a bright and curious child who enjoys books, puzzles, and art activities. "
                 "She has difficulty with /r/ and /s/ sounds but shows good motivation during therapy. "
                 "Responds well to visual cues and games. Family is very supportive and practices at home.",
        "milestones": [
            "Produce /r/ sound in isolation with 80% accuracy",
            "Use /r/ in initial position words (red, run, rabbit) with visual cues",
            "Maintain eye contact during structured speaking tasks",
            "Follow 2-step directions consistently in therapy setting",
        ],
        "strategies": [
            "Use mirror work for visual feedback during /r/ production",
            "Incorporate favorite books for /r/ sound practice",
            "Practice with high-frequency /r/ words in play contexts",
            "Use hand cues to prompt tongue positioning for /r/ sound",
        ],
    },
    {
        "therapist": 0,
        "updated_days_ago": 1,
        "name": "Aiden Chen",
        "dob": "2019-07-22",
        "category": "Social",
        "concern": "Language development delays, limited expressive vocabulary, difficulty with social communication",
        "guardian": "David Chen (father) and Lisa Chen (mother), Phone: (555) 987-6543",
        "notes": "Aiden is making steady progress with expressive language. He enjoys sensory play and "
                 "responds well to routine-based activities. Shows emerging joint attention skills. "
                 "Parents report increased communication attempts at home.",
        "milestones": [
            "Expand expressive vocabulary to 50+ functional words",
            "Use 2-word combinations spontaneously (more cookie, want toy)",
            "Maintain joint attention for 5+ minutes during preferred activities",
            "Initiate communication for requesting and commenting",
        ],
        "strategies": [
            "Use routine-based language intervention during snack time",
            "Model 2-word phrases and wait for imitation",
            "Incorporate sensory play to increase engagement",
            "Practice turn-taking with cause-effect toys",
        ],
    },
    {
        "therapist": 0,
        "updated_days_ago": 3,
        "name": "Sophia Rodriguez",
        "dob": "2020-11-08",
        "category": "Fine Motor",
        "concern": "Childhood apraxia of speech, oral motor difficulties",
        "guardian": "Maria Rodriguez (mother), Carlos Rodriguez (father), Phone: (555) 456-7890",
        "notes": "Sophia presents with suspected childhood apraxia of speech. She has difficulty with "
                 "motor planning for speech sounds. Very engaged and motivated child who loves music and "
                 "movement activities. Family is bilingual (Spanish/English).",
        "milestones": [
            "Produce CV syllables (ma, ba, pa) with consistent voicing",
            "Imitate simple oral motor movements (lip rounding, tongue protrusion)",
            "Use gestures and signs to communicate basic needs",
            "Vocalize during preferred activities and social interactions",
        ],
        "strategies": [
            "Use PROMPT techniques for oral motor facilitation",
            "Incorporate music and rhythm for speech timing",
            "Practice oral motor exercises before speech attempts",
            "Use multimodal communication (speech + gesture + sign)",
        ],
    },
    {
        "therapist": 1,
        "updated_days_ago": 5,
        "name": "Lucas Thompson",
        "dob": "2017-09-12",
        "category": "Communication",
        "concern": "Stuttering and fluency disorders, secondary behaviors developing",
        "guardian": "Rebecca Thompson (mother), James Thompson (father), Phone: (555) 234-5678",
        "notes": "Lucas began showing disfluencies around age 4. He exhibits repetitions and prolongations, "
                 "with some awareness developing. Very articulate when fluent. Enjoys sports and building activities.",
        "milestones": [
            "Reduce secondary behaviors (eye blinking, head movements)",
            "Use easy onset techniques in structured conversations",
            "Increase awareness of speech rate and breathing",
            "Maintain fluency in 5-minute conversations",
        ],
        "strategies": [
            "Practice slow, easy speech with family activities",
            "Use breathing exercises before speaking tasks",
            "Implement pausing strategies in conversation",
            "Build confidence through successful speaking experiences",
        ],
    },
    {
        "therapist": 1,
        "updated_days_ago": 4,
        "name": "Olivia Park",
        "dob": "2019-01-30",
        "category": "Communication",
        "concern": "Phonological processes, multiple sound errors affecting intelligibility",
        "guardian": "Susan Park (mother), Phone: (555) 345-6789",
        "notes": "Olivia presents with several phonological processes including fronting, stopping, and "
                 "cluster reduction. She is highly motivated and enjoys interactive games. Single mother "
                 "very involved in therapy goals.",
        "milestones": [
            "Eliminate fronting pattern (say /k/ and /g/ correctly)",
            "Reduce stopping of fricatives (/f/, /s/, /sh/ sounds)",
            "Improve overall speech intelligibility to 80% with unfamiliar listeners",
            "Use target sounds in connected speech",
        ],
        "strategies": [
            "Use minimal pairs therapy for sound contrasts",
            "Practice target sounds in games and play",
            "Provide auditory bombardment of target sounds",
            "Use tactile cues for sound placement",
        ],
    },
    {
        "therapist": 2,
        "updated_days_ago": 6,
        "name": "Ethan Williams",
        "dob": "2018-06-18",
        "category": "Gross Motor",
        "concern": "Language comprehension delays, difficulty following multi-step directions",
        "guardian": "Michelle Williams (mother), Robert Williams (father), Phone: (555) 567-8901",
        "notes": "Ethan has strong social skills but struggles with language comprehension. He benefits "
                 "from visual supports and structured routines. Family reports similar challenges at home "
                 "with following directions.",
        "milestones": [
            "Follow 3-step directions with visual supports",
            "Understand spatial concepts (in, on, under, beside)",
            "Respond to wh-questions (who, what, where) appropriately",
            "Demonstrate understanding of time concepts (first, then, last)",
        ],
        "strategies": [
            "Use visual schedules and picture supports",
            "Break down directions into smaller steps",
            "Practice comprehension through interactive books",
            "Use repetition and rephrasing for clarity",
        ],
    },
    {
        "therapist": 2,
        "updated_days_ago": 7,
        "name": "Mia Davis",
        "dob": "2020-04-25",
        "category": "Social",
        "concern": "Late talker, limited vocabulary, minimal phrase production",
        "guardian": "Amanda Davis (mother), Phone: (555) 678-9012",
        "notes": "Mia is a late talker with a vocabulary of approximately 25 words. She uses gestures "
                 "effectively and has good non-verbal communication skills. Mother is very engaged and "
                 "implements home strategies consistently.",
        "milestones": [
            "Expand vocabulary to 100+ words across categories",
            "Use 2-3 word phrases for requesting and commenting",
            "Imitate new words during structured play",
            "Use words spontaneously in daily routines",
        ],
        "strategies": [
            "Model target vocabulary during play routines",
            "Use environmental arrangement to encourage communication",
            "Practice new words through repetitive play activities",
            "Implement mand training for requesting",
        ],
    },
]

# child name -> [(days ago, seconds after that mark, sender, text)]
SEED_TRANSCRIPTS = {
    "Emma Johnson": [
        (5, 0, "therapist", "How can I help Emma with her /r/ sound production? She seems to be struggling with tongue placement."),
        (5, 60, "ai", 'For /r/ sound production, try these evidence-based strategies: 1) Use the "scoop" cue - tell Emma to make her tongue into a scoop, 2) Practice with high-frequency /r/ words like "red", "run", "car", 3) Use tactile feedback by having her feel throat vibration, 4) Try the "growling dog" analogy for the retroflex /r/. Start with isolated sounds before moving to syllables.'),
        (4, 0, "therapist", "Emma loves books and puzzles. How can I incorporate these interests into /r/ practice?"),
        (4, 120, "ai", 'Perfect! Since Emma enjoys books and puzzles, try: 1) "I Spy" games with /r/ words in picture books, 2) Create puzzle pieces with /r/ words written on them, 3) Read stories emphasizing /r/ sounds with dramatic voice, 4) Art activities naming /r/ colors (red, orange, purple), 5) Treasure hunts for /r/ objects. This maintains engagement while targeting speech goals.'),
        (3, 0, "therapist", "What home practice activities should I suggest to Emma's mom?"),
        (3, 180, "ai", 'For home practice, suggest these family-friendly activities: 1) "R words at dinner" - find /r/ foods (rice, carrots, berries), 2) Car ride games - spot /r/ words on signs, 3) Bedtime stories with /r/ emphasis, 4) Kitchen helper - stir, pour, prepare while saying /r/ words, 5) Mirror practice 5 minutes daily. Keep it fun and pressure-free!'),
        (2, 0, "therapist", "Emma is making progress with /r/ in isolation but struggling in words. How do I bridge this gap?"),
        (2, 300, "ai", 'This is a common challenge! Try these bridging techniques: 1) Use carrier phrases "I see a ___" with /r/ words, 2) Practice /r/ + vowel combinations (ra, re, ri, ro, ru), 3) Use backward chaining - start with word endings she can do, 4) Slow motion speech - elongate the /r/ in words, 5) Visual cues - hand gestures for tongue position. Be patient, this transition takes time!'),
        (1, 0, "therapist", "Should I work on /s/ sounds with Emma too, or focus just on /r/?"),
        (1, 240, "ai", "Great question! I recommend focusing primarily on /r/ since it's typically more challenging and she's showing progress. However, you can do some /s/ work: 1) Use minimal pairs (wace/race), 2) Do /s/ warm-ups before /r/ practice, 3) If Emma masters /r/ quickly, then increase /s/ focus. The key is not overwhelming her with too many targets simultaneously."),
    ],
    "Aiden Chen": [
        (4, 0, "therapist", "Aiden is struggling with turn-taking during play activities. Any evidence-based strategies?"),
        (4, 90, "ai", 'For turn-taking with Aiden, try these research-backed strategies: 1) Visual turn-taking cards or timers, 2) Start with highly motivating activities (cause-effect toys), 3) Use songs with natural pauses for turns, 4) Model "my turn, your turn" language consistently, 5) Begin with very short turns (2-3 seconds) and gradually increase. The key is starting with his interests!'),
        (3, 0, "therapist", "How can I work on joint attention skills during our sessions?"),
        (3, 150, "ai", 'Joint attention is crucial for Aiden\'s development! Try: 1) Follow his gaze and comment on what he\'s looking at, 2) Use animated expressions and voices with toys, 3) Create "wow" moments with cause-effect toys, 4) Point to and label objects together, 5) Use books with flaps and interactive elements, 6) Play games that require shared focus (bubbles, peek-a-boo). Start where his attention naturally goes!'),
        (2, 0, "therapist", "Aiden's parents want to know how to encourage more communication attempts at home."),
        (2, 200, "ai", "Excellent parent involvement! Suggest these naturalistic strategies: 1) Environmental arrangement - put favorite items in sight but out of reach, 2) Pause and wait during routines (dressing, eating), 3) Offer choices throughout the day, 4) Imitate his sounds and gestures, 5) Narrate daily activities, 6) Use expectant waiting with raised eyebrows. The goal is creating natural communication opportunities!"),
        (1, 0, "therapist", "What are some good activities for expanding Aiden's vocabulary during snack time?"),
        (1, 180, "ai", 'Snack time is perfect for language learning! Try: 1) Offer choices "apple or crackers?", 2) Practice action words (pour, dip, bite, chew), 3) Describe properties (hot, cold, crunchy, sweet), 4) Count items, 5) Use core words (more, all done, want), 6) Create routines with consistent language, 7) Make it social - talk about who, what, where. Keep it natural and fun!'),
    ],
    "Sophia Rodriguez": [
        (3, 0, "therapist", "Sophia may have childhood apraxia of speech. What are the key assessment indicators I should document?"),
        (3, 120, "ai", "Key CAS indicators to document: 1) Inconsistent errors on repeated productions, 2) Difficulty with voluntary vs automatic speech, 3) Groping behaviors or silent posturing, 4) Prosodic disturbances (stress, rhythm), 5) Limited phonetic inventory, 6) Slow DDK rates, 7) Better performance with shorter utterances. Use ASHA's CAS technical report for comprehensive assessment guidelines."),
        (2, 0, "therapist", "What treatment approaches work best for suspected CAS in preschoolers?"),
        (2, 240, "ai", 'For preschool CAS, consider: 1) PROMPT - provides tactile-kinesthetic cues, 2) Integral Stimulation - "watch me, listen to me, do what I do", 3) ReST (Rapid Syllable Transitions), 4) Dynamic Temporal and Tactile Cueing, 5) Multimodal communication (speech + gesture + AAC), 6) High practice frequency with shorter, frequent sessions. Focus on functional, meaningful words first!'),
        (1, 0, "therapist", "How do I incorporate Sophia's love of music into therapy sessions?"),
        (1, 160, "ai", "Music is fantastic for CAS! Try: 1) Rhythmic speech - practice syllables to steady beats, 2) Melodic intonation therapy principles, 3) Songs with repetitive lyrics, 4) Clapping while speaking, 5) Use familiar tunes with target words, 6) Instruments for timing and rhythm, 7) Movement + speech combinations. Music provides external timing cues that can facilitate motor planning!"),
    ],
    "Lucas Thompson": [
        (4, 0, "therapist", "Lucas is developing secondary behaviors with his stuttering. How do I address these sensitively?"),
        (4, 180, "ai", "Secondary behaviors indicate increased awareness and tension. Address by: 1) Acknowledge without drawing excess attention, 2) Focus on easy, relaxed speech, 3) Teach coping strategies (slow speech, breathing), 4) Build confidence through successful experiences, 5) Educate parents about not correcting or rushing, 6) Consider counseling component. The goal is reducing struggle and tension, not just fluency."),
        (2, 0, "therapist", "What fluency techniques work best for school-age children like Lucas?"),
        (2, 220, "ai", "For school-age stuttering, try: 1) Easy onset - gentle start to speech, 2) Light articulatory contacts, 3) Continuous airflow techniques, 4) Slower rate with natural pauses, 5) Self-monitoring strategies, 6) Voluntary stuttering to reduce fear, 7) Cognitive strategies for confidence building. Focus on techniques he can use independently in real situations."),
    ],
}


def seed_if_empty(store: KeyValueStore) -> bool:
    """Load the demo data when there are no users yet. Returns True if it seeded."""
    if list_users(store):
        return False

    logger.info("Seeding initial data...")

    users = [User(id=gen_id(), role="admin", created_at=now_iso(), **SEED_ADMIN)]
    therapists = []
    for name, email, password, days_ago in SEED_THERAPISTS:
        created_at = iso_ago(days=days_ago)
        user = User(
            id=gen_id(), role="therapist", name=name, email=email,
            password=password, created_at=created_at,
        )
        users.append(user)
        therapists.append(Therapist(id=user.id, name=name, email=email, created_at=created_at))

    children = []
    for spec in SEED_CHILDREN:
        fields = {k: v for k, v in spec.items() if k not in ("therapist", "updated_days_ago")}
        children.append(Child(
            id=gen_id(),
            therapist_id=therapists[spec["therapist"]].id,
            age_years=calc_age_years(spec["dob"]),
            updated_at=iso_ago(days=spec["updated_days_ago"]),
            **fields,
        ))

    with store.atomic():
        store.save_table(USERS_KEY, users)
        store.save_table(THERAPISTS_KEY, therapists)
        store.save_table(CHILDREN_KEY, children)

        by_name = {c.name: c for c in children}
        for child_name, lines in SEED_TRANSCRIPTS.items():
            messages = [
                ChatMessage(id=gen_id(), sender=sender, text=text, ts=iso_ago(days=days, seconds=offset))
                for days, offset, sender, text in lines
            ]
            store.save_table(chat_key(by_name[child_name].id), messages)

    logger.info(
        "Seed data created: %d users, %d therapists, %d children, %d transcripts",
        len(users), len(therapists), len(children), len(SEED_TRANSCRIPTS),
    )
    return True
