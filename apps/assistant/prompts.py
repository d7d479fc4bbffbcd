import json
import re

NUMBERED_LINE = re.compile(r'^\s*\d+[.)]\s*')


def build_suggestion_prompt(objective):
    return f"""
You are a skilled marketing copywriter specializing in CRM campaigns.
Write 3 short, catchy, customer-friendly marketing messages tailored for the campaign objective: "{objective}".

Each message must:
- Be under 100 words.
- Sound natural, engaging, and persuasive (not robotic).
- Use a positive, friendly, and action-oriented tone.
- Vary the style: one urgent, one warm & personal, one value-driven.
- Avoid jargon, technical words, or sounding too salesy.
- Include numbers like discounts, or timeframes where relevant.

Return the results as a numbered list, with each message on a separate line.
""".strip()


def build_summary_prompt(stats, campaign_name=None):
    heading = f'Campaign: "{campaign_name}"\n' if campaign_name else ''
    return f"""
You are a CRM analytics assistant.
Summarize this campaign's performance in 2-3 sentences.
{heading}Stats: {json.dumps(stats, default=str)}
Example style:
"Your last campaign reached 1,284 users. 1,140 messages were delivered. Customers with > 10K spend had the best delivery rate."
""".strip()


def split_suggestions(text):
    """Split a numbered-list completion into individual messages."""
    messages = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if NUMBERED_LINE.match(line):
            messages.append(NUMBERED_LINE.sub('', line))
        elif messages:
            messages[-1] = f"{messages[-1]} {line}"
        else:
            messages.append(line)
    return messages
