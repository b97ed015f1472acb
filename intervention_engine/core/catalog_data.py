"""Reference catalog of evidence-based behavioral interventions.

Rows use the storage (snake_case) shape so the same records can be seeded into
the ``interventions`` table or loaded directly into an ``InterventionCatalog``.
"""

from typing import Any

DEFAULT_INTERVENTIONS: tuple[dict[str, Any], ...] = (
    # Attention-seeking
    {
        "id": "attention-001",
        "name": "Differential Attention",
        "category": "attention",
        "behavior_function": ["attention-seeking", "calling out", "interrupting"],
        "description": (
            "Provide attention for appropriate behaviors while withholding attention "
            "for inappropriate behaviors"
        ),
        "implementation": [
            "Identify specific appropriate attention-seeking behaviors to reinforce",
            "Provide immediate, enthusiastic attention for appropriate behaviors",
            "Use planned ignoring for inappropriate attention-seeking (when safe)",
            "Redirect to appropriate attention-seeking when possible",
            "Ensure attention is given frequently for appropriate behavior",
        ],
        "data_collection": [
            "Frequency of appropriate vs inappropriate attention-seeking",
            "Duration of appropriate behaviors before attention provided",
            "Staff response consistency tracking",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle", "high"],
        "settings": ["classroom", "home", "community"],
        "frequency": "Continuous throughout day",
        "duration": "Ongoing intervention strategy",
    },
    {
        "id": "attention-002",
        "name": "Scheduled Attention",
        "category": "attention",
        "behavior_function": ["attention-seeking", "frequent requests"],
        "description": (
            "Provide attention on a predictable schedule to reduce inappropriate "
            "attention-seeking"
        ),
        "implementation": [
            "Set timer for regular attention intervals (every 5-15 minutes)",
            "Approach student and provide positive attention when timer goes off",
            "Gradually increase intervals between scheduled attention",
            "Pair with visual schedule showing when attention will be available",
            "Teach student to wait for scheduled times",
        ],
        "data_collection": [
            "Frequency of inappropriate attention-seeking between scheduled times",
            "Student ability to wait for scheduled attention",
            "Optimal interval length for individual student",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle"],
        "settings": ["classroom", "home"],
        "materials": ["Timer", "Visual schedule"],
        "frequency": "Every 5-15 minutes initially",
        "duration": "2-4 weeks to establish pattern",
    },
    # Escape/avoidance
    {
        "id": "escape-001",
        "name": "Task Modification",
        "category": "escape",
        "behavior_function": ["task avoidance", "academic escape", "demand avoidance"],
        "description": (
            "Modify task demands to reduce escape-motivated behaviors while maintaining "
            "learning goals"
        ),
        "implementation": [
            "Analyze current task demands and identify specific aspects student avoids",
            "Reduce task length or break into smaller components",
            "Provide choice in task order, materials, or response format",
            "Adjust difficulty level to ensure 80% success rate",
            "Use visual schedules to show task expectations clearly",
        ],
        "data_collection": [
            "Task completion rates before and after modification",
            "Time to task initiation",
            "Frequency of escape behaviors during modified vs original tasks",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle", "high"],
        "settings": ["classroom", "home"],
        "materials": ["Visual schedules", "Choice boards", "Modified materials"],
        "frequency": "Applied to all academic tasks initially",
        "duration": "Gradually fade modifications over 4-8 weeks",
    },
    {
        "id": "escape-002",
        "name": "High-Probability Request Sequence",
        "category": "escape",
        "behavior_function": ["demand refusal", "noncompliance"],
        "description": (
            "Present several easy requests before difficult ones to build compliance momentum"
        ),
        "implementation": [
            "Identify 3-5 requests student almost always complies with",
            "Present these high-probability requests in sequence",
            "Provide praise for compliance with each easy request",
            "Present target (difficult) request immediately after sequence",
            "Gradually reduce number of high-probability requests needed",
        ],
        "data_collection": [
            "Compliance rate with target requests after HP sequence",
            "Number of HP requests needed for success",
            "Generalization to requests without HP sequence",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle"],
        "settings": ["classroom", "home", "therapy"],
        "frequency": "Before each difficult request initially",
        "duration": "2-6 weeks depending on progress",
    },
    # Sensory-seeking
    {
        "id": "sensory-001",
        "name": "Sensory Breaks",
        "category": "sensory",
        "behavior_function": ["movement seeking", "sensory stimulation", "fidgeting"],
        "description": (
            "Provide scheduled sensory input to reduce inappropriate sensory-seeking behaviors"
        ),
        "implementation": [
            "Identify preferred sensory activities (movement, touch, sound)",
            "Schedule regular sensory breaks every 15-30 minutes",
            "Create sensory break menu with 3-5 options",
            "Use timer and visual schedule to show when breaks are available",
            "Gradually increase time between scheduled breaks",
        ],
        "data_collection": [
            "Frequency of inappropriate sensory behaviors between breaks",
            "Engagement level during sensory breaks",
            "Optimal frequency and duration of breaks",
        ],
        "evidence_level": "moderate",
        "age_groups": ["preschool", "elementary", "middle"],
        "settings": ["classroom", "home"],
        "materials": ["Sensory tools", "Timer", "Visual schedule", "Designated sensory space"],
        "frequency": "Every 15-30 minutes initially",
        "duration": "Ongoing with gradual fading",
    },
    {
        "id": "sensory-002",
        "name": "Fidget Tools",
        "category": "sensory",
        "behavior_function": ["tactile seeking", "movement needs", "focus enhancement"],
        "description": (
            "Provide appropriate fidget tools to meet sensory needs while maintaining attention"
        ),
        "implementation": [
            "Assess student preferences for different textures and movements",
            "Provide 2-3 fidget options that are quiet and non-disruptive",
            "Teach appropriate fidget use rules and expectations",
            "Rotate fidget options to maintain novelty",
            "Monitor that fidgets enhance rather than distract from learning",
        ],
        "data_collection": [
            "On-task behavior with vs without fidget tools",
            "Appropriate vs inappropriate use of fidgets",
            "Academic performance while using fidgets",
        ],
        "evidence_level": "moderate",
        "age_groups": ["elementary", "middle", "high"],
        "settings": ["classroom", "home", "testing"],
        "materials": ["Stress balls", "Fidget cubes", "Therapy putty", "Textured strips"],
        "frequency": "Available throughout academic tasks",
        "duration": "Ongoing support tool",
    },
    # Social skills
    {
        "id": "social-001",
        "name": "Social Scripts",
        "category": "social",
        "behavior_function": ["peer interaction difficulties", "social communication"],
        "description": "Teach specific language and behaviors for common social situations",
        "implementation": [
            "Identify specific social situations where student struggles",
            "Develop simple, clear scripts for appropriate responses",
            "Practice scripts through role-play in safe environment",
            "Use visual cues or cards to prompt script use",
            "Gradually fade prompts as skills become more natural",
        ],
        "data_collection": [
            "Frequency of appropriate social initiations",
            "Use of taught scripts in natural settings",
            "Peer response to student social attempts",
        ],
        "evidence_level": "moderate",
        "age_groups": ["preschool", "elementary", "middle", "high"],
        "settings": ["classroom", "playground", "community"],
        "materials": ["Social script cards", "Visual prompts"],
        "frequency": "Practice 2-3 times daily, use as needed",
        "duration": "4-8 weeks for acquisition, ongoing practice",
    },
    # Tangible/access
    {
        "id": "tangible-001",
        "name": "Token Economy",
        "category": "tangible",
        "behavior_function": ["motivation", "behavioral momentum", "access to preferred items"],
        "description": (
            "Systematic reinforcement program using tokens that can be exchanged for "
            "preferred items/activities"
        ),
        "implementation": [
            "Identify highly preferred items/activities through preference assessment",
            "Establish clear behavioral expectations for earning tokens",
            "Create simple token board or chart",
            "Provide tokens immediately following target behaviors",
            "Allow regular opportunities to exchange tokens for rewards",
            "Gradually increase behavioral requirements for tokens",
        ],
        "data_collection": [
            "Frequency of target behaviors",
            "Tokens earned per day/session",
            "Student engagement with token system",
            "Generalization of behaviors without tokens",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle"],
        "settings": ["classroom", "home", "therapy"],
        "materials": ["Token board", "Tokens/stickers", "Preferred items menu"],
        "frequency": "Tokens delivered immediately, exchange 1-3 times daily",
        "duration": "4-12 weeks with gradual fading",
    },
    # General positive behavior support
    {
        "id": "general-001",
        "name": "Environmental Modification",
        "category": "general",
        "behavior_function": ["antecedent intervention", "prevention"],
        "description": (
            "Modify physical and social environment to prevent problem behaviors and "
            "promote success"
        ),
        "implementation": [
            "Analyze current environment for behavioral triggers",
            "Modify physical space to reduce distractions or access to inappropriate items",
            "Adjust lighting, noise levels, and seating arrangements",
            "Create clear visual boundaries and organization systems",
            "Establish predictable routines and expectations",
        ],
        "data_collection": [
            "Frequency of problem behaviors before and after modifications",
            "Student engagement and on-task behavior",
            "Need for additional interventions",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle", "high"],
        "settings": ["classroom", "home", "community"],
        "materials": ["Room dividers", "Visual schedules", "Organization systems"],
        "frequency": "Continuous environmental support",
        "duration": "Ongoing with periodic review and adjustment",
    },
    {
        "id": "general-002",
        "name": "Choice Making",
        "category": "general",
        "behavior_function": ["self-determination", "engagement", "compliance"],
        "description": (
            "Provide structured choices to increase student engagement and reduce "
            "behavioral challenges"
        ),
        "implementation": [
            "Identify opportunities for meaningful choices throughout the day",
            "Create choice boards with 2-4 options",
            "Teach choice-making process explicitly",
            "Honor student choices when possible and safe",
            "Gradually expand choice opportunities",
            'Use "first/then" choices for less preferred activities',
        ],
        "data_collection": [
            "Student engagement when choices are available vs not available",
            "Frequency of problem behaviors during choice vs no-choice conditions",
            "Types of choices most motivating for individual student",
        ],
        "evidence_level": "high",
        "age_groups": ["preschool", "elementary", "middle", "high"],
        "settings": ["classroom", "home", "community"],
        "materials": ["Choice boards", "Visual choice options"],
        "frequency": "Multiple opportunities throughout day",
        "duration": "Ongoing strategy with expanding options",
    },
)
