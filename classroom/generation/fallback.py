from classroom.models.session_config import ChoiceSet, TalkPrompt

# Built-in content so every activity stays usable offline
FALLBACK_CONTENT = {
    "four_three_two": [
        "Talk about a skill you would like to learn and why.",
        "Describe a memorable journey you have taken.",
        "Talk about how your daily routine has changed over the years.",
    ],
    "question_cards": [
        "What's something you've changed your mind about recently?",
        "If you could have dinner with anyone, who would it be and why?",
        "What's a skill everyone should learn?",
        "What's the best advice you've ever received?",
        "If you could live anywhere in the world, where would you choose?",
    ],
    "agree_disagree": [
        "People learn languages better through experience than through grammar study.",
    ],
    "timed_talk": [
        TalkPrompt(
            question="Talk about a place you enjoy spending time in.",
            points=[
                "where it is",
                "how often you go there",
                "what you do there",
                "why it is important to you",
            ],
        ),
    ],
    "this_or_that": [
        ChoiceSet(options=["Summer", "Winter"]),
        ChoiceSet(options=["Coffee", "Tea"]),
        ChoiceSet(options=["Books", "Movies"]),
        ChoiceSet(options=["City", "Countryside"]),
        ChoiceSet(options=["Early morning", "Late night"]),
    ],
}
