"""
Prompts for doctor note generation
"""

note_system_prompt = """
You are a professional medical assistant helping to generate doctor notes.
Provide accurate, professional, and detailed medical documentation.
"""

doctor_note_prompt = """Generate a comprehensive doctor note for the following patient:

Patient Information:
- Name: {first_name} {last_name}
- Age: {age}
- Gender: {gender}
- Date of Birth: {date_of_birth}
- Phone: {phone_number}
- Medical History: {medical_history}
- Allergies: {allergies}
- Current Medications: {medications}
- Family History: {family_history}
{appointment_section}
Please generate a professional medical note following this structure:
1. Chief Complaint
2. History of Present Illness
3. Past Medical History
4. Allergies
5. Current Medications
6. Family History
7. Physical Examination (general findings)
8. Assessment and Plan

Make it professional, detailed, and appropriate for medical documentation."""

appointment_section_prompt = """
Appointment Details:
- Date: {date}
- Type: {type}
- Reason: {reason}
"""

note_summary_prompt = """Please provide a brief 2-3 sentence summary of this doctor note:

{content}"""
