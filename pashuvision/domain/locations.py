from __future__ import annotations

INDIAN_STATES_AND_DISTRICTS: dict[str, list[str]] = {
    "Andhra Pradesh": ["Guntur", "Krishna", "Prakasam", "Chittoor", "Kurnool"],
    "Bihar": ["Patna", "Gaya", "Muzaffarpur", "Bhagalpur", "Darbhanga"],
    "Gujarat": ["Ahmedabad", "Amreli", "Banaskantha", "Junagadh", "Mehsana", "Kutch"],
    "Haryana": ["Hisar", "Rohtak", "Jind", "Karnal", "Bhiwani"],
    "Karnataka": ["Mysuru", "Tumakuru", "Hassan", "Belagavi", "Mandya"],
    "Madhya Pradesh": ["Indore", "Bhopal", "Ujjain", "Jabalpur", "Gwalior"],
    "Maharashtra": ["Pune", "Nagpur", "Kolhapur", "Satara", "Latur", "Nashik"],
    "Odisha": ["Cuttack", "Ganjam", "Kalahandi", "Puri", "Sambalpur"],
    "Punjab": ["Ludhiana", "Amritsar", "Bathinda", "Patiala", "Ferozepur"],
    "Rajasthan": ["Jaipur", "Bikaner", "Nagaur", "Barmer", "Jodhpur"],
    "Tamil Nadu": ["Erode", "Coimbatore", "Madurai", "Thanjavur", "Salem"],
    "Telangana": ["Karimnagar", "Nalgonda", "Warangal", "Medak", "Khammam"],
    "Uttar Pradesh": ["Agra", "Etawah", "Mathura", "Lucknow", "Varanasi", "Meerut"],
    "West Bengal": ["Nadia", "Murshidabad", "Bardhaman", "Hooghly", "Purulia"],
}
